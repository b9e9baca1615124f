import argparse
import sys
import os

# Add project root to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from models import get_engine, Base

def init_db(db_url=None, drop=False):
    print("Initializing Database...")
    engine = get_engine(db_url)
    if drop:
        print("Dropping existing item tables...")
        Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    engine.dispose()
    print(f"Tables ready: {', '.join(sorted(Base.metadata.tables))}")

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the item tables.")
    parser.add_argument('--db-url', default=None)
    parser.add_argument('--drop', action='store_true', help="Drop the tables first (destroys imported data)")
    args = parser.parse_args()
    init_db(args.db_url, drop=args.drop)
