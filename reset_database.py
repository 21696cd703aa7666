#!/usr/bin/env python3
"""Drop every marketplace collection so the database starts empty."""

from dotenv import load_dotenv

load_dotenv()

from marketplace.database import (
    IMAGES_COLLECTION,
    LISTING_COLLECTIONS,
    PENDING_COLLECTION,
    get_database,
)


def reset_all_collections():
    """Drop all collections and start fresh."""
    db = get_database()

    collections_to_drop = [*LISTING_COLLECTIONS.values(), IMAGES_COLLECTION, PENDING_COLLECTION]

    print("Clearing all collections...")
    for collection_name in collections_to_drop:
        db[collection_name].drop()
        print(f"   Dropped {collection_name}")

    print("\nDatabase reset complete. All listings, images and pending verifications were removed.")


if __name__ == "__main__":
    print(f"Resetting database '{get_database().name}'.")
    print("   This will DELETE ALL listings, images and pending verifications.")

    confirm = input("\nAre you sure? Type 'yes' to continue: ")
    if confirm.lower() == 'yes':
        reset_all_collections()
    else:
        print("Reset cancelled.")
