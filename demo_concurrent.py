import asyncio
import os
from sdk.pystore import StoreClient


async def create_one(client: StoreClient, n: int):
    r = await client.create_product_async(f"Widget {n}", "Concurrent demo item", 10 + n, "demo", True)
    if r.status_code == 201:
        print(f"✅ Widget {n} created with id {r.json()['id']}")
    else:
        print(f"❌ Widget {n} failed: HTTP {r.status_code} {r.json()}")
    return r


async def main(count: int = 20):
    c = StoreClient(
        base_url=os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000"),
        api_key=os.getenv("PRODUCT_API_KEY", "mysecretapikey"),
    )
    before = c.stats()["totalProducts"]

    print(f"\n⚡ Creating {count} products concurrently...")
    results = await asyncio.gather(*(create_one(c, n) for n in range(count)))

    ids = [r.json()["id"] for r in results if r.status_code == 201]
    after = c.stats()

    print(f"\n📦 Products before: {before}, after: {after['totalProducts']}")
    print(f"🔑 Unique ids: {len(set(ids))} of {len(ids)}")
    print("📊 By category:", after["countByCategory"])


if __name__ == "__main__":
    asyncio.run(main())
