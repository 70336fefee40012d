#!/usr/bin/env python
from sdk.pycatalog import CatalogClient, CatalogError


def main():
    c = CatalogClient(base_url="http://127.0.0.1:3000", api_key="mysecretapikey")

    print(c.hello())

    # -----------------------------
    # Browse the seeded catalog
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())

    print("\nElectronics, one per page, page 2...")
    print(c.list_products(category="Electronics", page=2, limit=1))

    print("\nSearching for 'phone'...")
    print(c.search_products("phone"))

    print("\nStats per category...")
    print(c.product_stats())

    # -----------------------------
    # Create, update, delete
    # -----------------------------
    print("\nCreating a product...")
    desk = c.create_product("Desk", 150, description="Standing desk", category="furniture")
    print(desk)

    print("\nUpdating its price (the id in the body is ignored)...")
    print(c.update_product(desk["id"], id="hijack", name="Desk", price=175))

    print("\nDeleting it...")
    c.delete_product(desk["id"])
    print(c.get_product(desk["id"]))

    # -----------------------------
    # Failures
    # -----------------------------
    print("\nWrites without the key are refused...")
    try:
        CatalogClient(base_url=c.base_url).create_product("Desk", 150)
    except CatalogError as e:
        print(e)

    print("\nA negative price is refused...")
    try:
        c.create_product("Desk", -5)
    except CatalogError as e:
        print(e)


if __name__ == "__main__":
    main()
