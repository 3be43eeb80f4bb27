"""Example usage of the valuecompare engine."""

import json
from dataclasses import dataclass
from datetime import datetime, timezone

from valuecompare import ComparisonEngine, ComparisonOptions, compare


@dataclass
class Money:
    amount: int
    currency: str


# Expected invoice (legacy system)
old_invoice = {
    "id": "INV-001",
    "total": Money(10050, "EUR"),
    "status": "paid",
    "createdAt": datetime(2025, 2, 2, 10, 30, 0, 120000, tzinfo=timezone.utc),
    "tags": ["priority", "export"],
    "lineItems": [
        {"id": "WIDGET-001", "quantity": 5, "unitPrice": 1000},
        {"id": "GADGET-002", "quantity": 2, "unitPrice": 2525},
    ],
    "metadata": {"traceId": "abc123"},
}

# Actual invoice (new system)
new_invoice = {
    "id": "INV-001",
    "total": Money(10050, "EUR"),
    "status": "paid",
    "createdAt": datetime(2025, 2, 2, 10, 30, 0, 870000, tzinfo=timezone.utc),
    "tags": ["export", "priority"],
    "lineItems": [
        {"id": "GADGET-002", "quantity": 3, "unitPrice": 2525},
        {"id": "WIDGET-001", "quantity": 5, "unitPrice": 1000},
    ],
    "region": "eu-west",
}


def main():
    print("=" * 60)
    print("valuecompare - Comparison Example")
    print("=" * 60)

    # First-divergence mode: one message
    result = compare(old_invoice, new_invoice)
    print(f"\nMatch: {result.is_match}")
    print(f"Message: {result.message}")

    # Exhaustive mode: every divergence
    engine = ComparisonEngine(ComparisonOptions(exhaustive=True))
    result = engine.compare(old_invoice, new_invoice)

    print(f"\nDivergences ({len(result.divergences)}):")
    for divergence in result.divergences:
        print(f"  - [{divergence.kind.value}] {divergence.path}: "
              f"{divergence.expected!r} -> {divergence.actual!r}")

    print("\nSummary:")
    print(json.dumps(result.summary(), indent=2))


if __name__ == "__main__":
    main()
