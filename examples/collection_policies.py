"""
Collections: policies for inputs without a recognized shape.
Run: python examples/collection_policies.py
"""

import logging
import os
import sys
# Ensure project root is on sys.path for direct execution
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from proto_collect import Collection, Policy, ProtoValidationException


class Point:
    def __init__(self, x, y):
        self.x = x
        self.y = y


def main():
    logging.basicConfig(level=logging.DEBUG)

    # Default: objects are read through their public attributes (logged at DEBUG)
    print("Fallback:", Collection(Point(1, 2)).all())

    # Warn and read the attributes anyway
    print("Warn:", Collection(Point(3, 4), Policy(on_unrecognized="warn")).all())

    # Error on unrecognized input (will raise)
    try:
        Collection(Point(5, 6), Policy(on_unrecognized="error"))
    except ProtoValidationException as ex:
        print("Expected error (on_unrecognized=error):", ex)

    # Dumps are written at the policy's level
    Collection([1, 2, 3], Policy(dump_level=logging.INFO)).dump()


if __name__ == "__main__":
    main()
