from __future__ import annotations

import importlib
from pathlib import Path

from dotenv import load_dotenv

from survey_payroll.config import get_settings_module
from survey_payroll.database.bootstrap import apply_seed_sql, ensure_demo_users


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    seed_path = Path(__file__).resolve().parents[1] / "database" / "seed.sql"
    ensure_demo_users(db_config)
    apply_seed_sql(db_config, seed_path=seed_path)

    print(
        "OK: Seeded demo accounts (admin/admin123, employee/employee123) -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
