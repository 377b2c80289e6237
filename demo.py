#!/usr/bin/env python
import os
from sdk.pystore import StoreClient


def main():
    base_url = os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000")
    public = StoreClient(base_url=base_url)
    c = StoreClient(base_url=base_url, api_key=os.getenv("PRODUCT_API_KEY", "mysecretapikey"))

    # -----------------------------
    # Browse the seed catalogue
    # -----------------------------
    print("Listing products...")
    print(c.list_products())

    print("\nElectronics only...")
    print(c.list_products(category="electronics"))

    print("\nSearching for 'lap'...")
    print(c.list_products(search="lap"))

    # -----------------------------
    # Writes need the api key
    # -----------------------------
    print("\nCreating without a key...")
    r = public.session.post(f"{public.base_url}/api/products", json={"name": "Nope"})
    print(r.status_code, r.json())

    print("\nCreating a product...")
    mouse = c.create_product("Mouse", "Wireless", 25, "electronics", True)
    print(mouse)

    print("\nMarking product 3 in stock...")
    print(c.update_product("3", in_stock=True))

    print("\nDeleting product 2...")
    print(c.delete_product("2"))

    # -----------------------------
    # Stats
    # -----------------------------
    print("\nStatistics...")
    print(c.stats())


if __name__ == "__main__":
    main()
