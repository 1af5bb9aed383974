"""ZapCart database management CLI.

Usage:
    python src/manage.py setup-db [--domain delivery ordering]
    python src/manage.py drop-db [--domain ordering]
"""

import argparse

from shared.db import drop_db, setup_db

ACTIONS = {
    "setup-db": ("Creating", setup_db),
    "drop-db": ("Dropping", drop_db),
}


def _domains():
    from delivery.domain import delivery
    from ordering.domain import ordering

    return {"delivery": delivery, "ordering": ordering}


def run(action: str, names: list[str] | None = None) -> None:
    """Apply ``action`` to the schemas of the named domains (all by default)."""
    verb, operation = ACTIONS[action]
    domains = _domains()
    for name in names or domains:
        domain = domains[name]
        domain.init()
        print(f"{verb} {name} schema...")
        operation(domain)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="ZapCart database management")
    parser.add_argument("command", choices=sorted(ACTIONS))
    parser.add_argument(
        "--domain",
        choices=sorted(_domains()),
        nargs="*",
        help="Domain(s) to act on (default: all)",
    )
    args = parser.parse_args()
    run(args.command, args.domain)


if __name__ == "__main__":
    main()
