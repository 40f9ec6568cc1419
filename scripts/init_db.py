"""
Create the projekt schema (customers, projects) and optionally seed demo rows.

Usage:
  python scripts/init_db.py            # create missing tables
  python scripts/init_db.py --seed     # ...and add demo customers/projects if empty
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running as a script (Windows-friendly).
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dotenv import load_dotenv  # noqa: E402

from app.projekt import build_services  # noqa: E402
from app.projekt.config import load_settings  # noqa: E402

DEMO_PROJECTS = (
    ("Webbplats", "Acme"),
    ("Mobilapp", "Acme"),
    ("Intranät", "Nordkraft"),
)


def init_db(*, seed: bool = False) -> None:
    load_dotenv()
    settings = load_settings()
    services = build_services(settings)
    try:
        services.context.init_schema()
        print(f"Schema ready at {services.engine.url.render_as_string(hide_password=True)}")
        if not seed:
            return
        if services.projects.get_all_projects():
            print("Projects already present; skipping seed.")
            return
        for project_name, customer_name in DEMO_PROJECTS:
            services.projects.create_project(project_name, customer_name)
        print(f"Seeded {len(DEMO_PROJECTS)} projects.")
    finally:
        services.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the projekt database schema")
    parser.add_argument("--seed", action="store_true", help="Insert demo rows into an empty database")
    args = parser.parse_args()
    init_db(seed=args.seed)


if __name__ == "__main__":
    main()
