from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .audit.controller import register as register_audit
from .biodata.controller import register as register_biodata
from .common.json_provider import ApiJSONProvider
from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables, seed_defaults
from .holidays.controller import register as register_holidays
from .leaves.controller import register as register_leaves
from .payroll.controller import register as register_payroll
from .requests.controller import register as register_requests
from .roles.controller import register as register_roles
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app.

    Passing a ready `container` skips every database side effect (schema, seed),
    which is how the HTTP tests run against in-memory repositories.
    """
    load_dotenv(override=False)
    app = Flask(__name__)
    app.json = ApiJSONProvider(app)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger.debug(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.debug("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            audit_workers=int(getattr(settings, "AUDIT_WORKERS", 0)),
            require_email_verification=bool(getattr(settings, "REQUIRE_EMAIL_VERIFICATION", False)),
        )

        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            seed_defaults(
                container,
                admin_username=getattr(settings, "DEFAULT_ADMIN_USERNAME", "admin"),
                admin_password=getattr(settings, "DEFAULT_ADMIN_PASSWORD", "admin123"),
                admin_email=getattr(settings, "DEFAULT_ADMIN_EMAIL", None),
            )

    app.extensions["employee_admin"] = container

    register_users(app, container)
    register_roles(app, container)
    register_audit(app, container)
    register_leaves(app, container)
    register_biodata(app, container)
    register_payroll(app, container)
    register_holidays(app, container)
    register_requests(app, container)

    return app
