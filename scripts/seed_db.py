from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.dairy_delivery.dairy_delivery.container import build_container
from src.dairy_delivery.dairy_delivery.database.bootstrap import apply_schema
from src.dairy_delivery.dairy_delivery.database.seed import seed_demo_data


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config)
    container = build_container(
        backend="mysql",
        db_config=db_config,
        default_milk_price=float(getattr(settings, "DEFAULT_MILK_PRICE", 58)),
    )
    seed_demo_data(container)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
