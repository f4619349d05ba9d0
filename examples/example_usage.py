"""Example: use the service layer without Flask.

Controllers are a thin layer; business rules live in the services.
"""

import importlib

from config import get_settings_module

from edu_center.auth.claims import AuthClaims
from edu_center.container import build_container
from edu_center.core.enums import Role


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, secret_key=settings.SECRET_KEY)
    leader = AuthClaims(user_id="example", role=Role.LEADER, display_name="Example Leader")
    lines = container.salary_service.get_salary_information(leader, month=1, year=2024)
    print(container.salary_service.build_report(lines))


if __name__ == "__main__":
    main()
