"""
Collections: basic usage.
Run: python examples/collection_basic.py
"""

import os
import sys
# Ensure project root is on sys.path for direct execution
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from proto_collect import collect, data_get, data_set, data_forget


def main():
    orders = collect([
        {"id": 1, "customer": {"name": "ada"}, "status": "completed", "total": 10.0},
        {"id": 2, "customer": {"name": "ada"}, "status": "completed", "total": 15.0},
        {"id": 3, "customer": {"name": "grace"}, "status": "completed", "total": 8.0},
        {"id": 4, "customer": {"name": "grace"}, "status": "cancelled", "total": 9.0},
    ])

    completed = orders.filter(lambda order: order["status"] == "completed")
    print("Completed totals:", completed.pluck("total").all())
    print("Revenue:", completed.sum("total"), "average:", completed.avg("total"))
    print("Median total:", orders.median("total"))
    print("Most frequent customer:", orders.mode("customer.name"))
    print("Totals by order id:", orders.pluck("total", "id").all())
    print("Any order over 12?", orders.contains("total", ">", 12))
    print("All orders paid?", orders.every("status", "completed"))
    print("Sorted by total:", orders.sort(lambda a, b: a["total"] - b["total"]).pluck("id").all())

    # Dot-notation access to nested data
    print("Customer names:", data_get(orders, "*.customer.name"))
    config = data_set(None, "database.connections.default", "sqlite")
    config = data_set(config, "database.connections.replicas", ["r1", "r2"])
    print("Config:", config)
    print("Without replicas:", data_forget(config, "database.connections.replicas"))


if __name__ == "__main__":
    main()
