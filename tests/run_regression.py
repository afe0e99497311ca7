"""Run the arena fight scenarios without pytest.

Usage:
    python tests/run_regression.py [name-fragment ...]
"""

from __future__ import annotations

import sys

from regression_suite import run_all


def main(argv) -> int:
    wanted = [arg.lower() for arg in argv]
    results = [
        entry for entry in run_all()
        if not wanted or any(w in entry[0].lower() for w in wanted)
    ]
    for name, ok, reason in results:
        print(f"{'PASS' if ok else 'FAIL'}: {name}" + ("" if ok else f" -> {reason}"))

    failed = sum(1 for _, ok, _ in results if not ok)
    print(f"{len(results) - failed}/{len(results)} scenarios passed.")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
