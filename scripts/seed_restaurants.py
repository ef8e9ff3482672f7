#!/usr/bin/env python3
# =============================================================================
# scripts/seed_restaurants.py - Development Data Loader
# =============================================================================
# Loads or clears restaurant data and mints development tokens.
#
# Usage:
#   # Import restaurants from a JSON file (list of create bodies)
#   python scripts/seed_restaurants.py --import scripts/data/restaurants.json
#
#   # Delete every restaurant and review
#   python scripts/seed_restaurants.py --delete
#
#   # Print a token for trying protected routes
#   python scripts/seed_restaurants.py --token owner
#
# Prerequisites:
#   - MongoDB must be running
#   - Environment variables must be set (.env file)
# =============================================================================

import argparse
import asyncio
import json
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from app.auth import UserRole, create_access_token
from core.models import Restaurant, RestaurantCreate, Review
from lib.mongo_client import MongoClient


async def import_restaurants(path: str) -> int:
    """Validate and insert every restaurant in a JSON file."""
    with open(path, encoding="utf-8") as f:
        bodies = json.load(f)

    restaurants = [Restaurant(**RestaurantCreate(**body).model_dump()) for body in bodies]
    await Restaurant.insert_many(restaurants)
    return len(restaurants)


async def delete_all() -> tuple[int, int]:
    reviews = await Review.find_all().delete()
    restaurants = await Restaurant.find_all().delete()
    return (
        restaurants.deleted_count if restaurants else 0,
        reviews.deleted_count if reviews else 0,
    )


async def run(args: argparse.Namespace) -> None:
    await MongoClient.init()
    try:
        if args.import_file:
            count = await import_restaurants(args.import_file)
            print(f"Imported {count} restaurants from {args.import_file}")
        if args.delete:
            restaurants, reviews = await delete_all()
            print(f"Deleted {restaurants} restaurants and {reviews} reviews")
    finally:
        MongoClient.close()


def main():
    parser = argparse.ArgumentParser(description="Restaurant directory development data")
    parser.add_argument("--import", dest="import_file", metavar="FILE", help="JSON file of restaurants to insert")
    parser.add_argument("--delete", action="store_true", help="delete all restaurants and reviews")
    parser.add_argument(
        "--token",
        metavar="ROLE",
        choices=[role.value for role in UserRole],
        help="print an access token for ROLE",
    )
    args = parser.parse_args()

    if not (args.import_file or args.delete or args.token):
        parser.error("nothing to do: pass --import, --delete or --token")

    if args.token:
        print(create_access_token(f"dev-{args.token}", role=args.token))

    if args.import_file or args.delete:
        asyncio.run(run(args))


if __name__ == "__main__":
    main()
