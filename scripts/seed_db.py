from __future__ import annotations

import importlib

from dotenv import load_dotenv

from employee_admin.config import get_settings_module
from employee_admin.container import build_container
from employee_admin.database.bootstrap import seed_defaults


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    container = build_container(db_config=db_config)
    seed_defaults(
        container,
        admin_username=settings.DEFAULT_ADMIN_USERNAME,
        admin_password=settings.DEFAULT_ADMIN_PASSWORD,
        admin_email=getattr(settings, "DEFAULT_ADMIN_EMAIL", None),
    )

    print(
        "OK: Seeded default roles and admin -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
