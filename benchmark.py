from dataclasses import dataclass, field
from sqlalchemy import create_engine, text
from sqlstruct import SQLAlchemyHandle, insert, update, delete, load, query_all
from sqlstruct.base.schema import clear_cache, extract, extract_table
import argparse
import time
import random
from faker import Faker


random.seed(42)
fake = Faker()
CATEGORIES = list("ABCDEFGHIJK")

DDL = """
CREATE TABLE "item" (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT,
    active BOOLEAN,
    category TEXT,
    pricing_price FLOAT,
    pricing_cost FLOAT
)
"""


@dataclass
class Pricing:
    price: float = 0.0
    cost: float = 0.0


@dataclass
class Item:
    __tablename__ = "item"

    ID: int = 0
    name: str = ""
    active: bool = False
    category: str = ""
    pricing: Pricing = field(default_factory=Pricing)


def generate_items(n):
    for _ in range(n):
        yield Item(
            name=fake.name(),
            active=random.choice([True, False]),
            category=random.choice(CATEGORIES),
            pricing=Pricing(
                price=round(random.uniform(5, 500), 2),
                cost=round(random.uniform(1, 300), 2),
            ),
        )

def extractions(count):
    item = Item()

    start = time.time()
    for _ in range(count):
        extract(Item)
    uncached = time.time() - start

    clear_cache()
    start = time.time()
    for _ in range(count):
        extract_table(item)
    cached = time.time() - start

    print(f"Extracted {count} schemas in {uncached:.2f} seconds (uncached), bound {count} tables in {cached:.2f} seconds (cached).")
    return uncached + cached

def inserts(db, count):
    insert_start = time.time()
    for item in generate_items(count):
        insert(db, None, item)
    insert_duration = time.time() - insert_start
    print(f"Inserted {count} items in {insert_duration:.2f} seconds.")
    return insert_duration

def loads(db, random_ids):
    load_start = time.time()
    for rid in random_ids:
        load(db, None, Item(), rid)
    load_duration = time.time() - load_start
    print(f"Loaded {len(random_ids)} items in {load_duration:.2f} seconds.")
    return load_duration

def queries(db, count):
    query_start = time.time()
    for _ in range(count):
        category = random.choice(CATEGORIES)
        query_all(db, Item, 'SELECT * FROM "item" WHERE category=$1 LIMIT 50', category)
    query_duration = time.time() - query_start
    print(f"Executed {count} select queries in {query_duration:.2f} seconds.")
    return query_duration

def updates(db, random_ids):
    update_start = time.time()
    for rid in random_ids:
        item = load(db, None, Item(), rid)
        item.name = fake.name()
        item.category = random.choice(CATEGORIES)
        item.active = random.choice([True, False])
        update(db, None, item)
    update_duration = time.time() - update_start
    print(f"Executed {len(random_ids)} updates in {update_duration:.2f} seconds.")
    return update_duration

def deletes(db, random_ids):
    delete_start = time.time()
    for rid in random_ids:
        delete(db, None, Item(ID=rid))
    delete_duration = time.time() - delete_start
    print(f"Deleted {len(random_ids)} items in {delete_duration:.2f} seconds.")
    return delete_duration

def run_benchmark(url="sqlite://", count=100_000):
    print(f"Running benchmark: url={url}, count={count}")

    engine = create_engine(url, echo=False)

    with engine.begin() as connection:
        connection.execute(text(DDL))
        db = SQLAlchemyHandle(connection)

        elapsed = extractions(count)
        elapsed += inserts(db, count)
        elapsed += queries(db, 500)

        random_ids = random.sample(range(1, count + 1), min(500, count))
        elapsed += loads(db, random_ids)
        elapsed += updates(db, random_ids)
        elapsed += deletes(db, random_ids)

    print(f"Total runtime for {url}: {elapsed:.2f} seconds.")



if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--url", default="sqlite://")
    parser.add_argument("--count", type=int, default=10_000)
    args = parser.parse_args()
    run_benchmark(args.url, args.count)
