from __future__ import annotations

from flask import Flask, request

from ..auth.gate import current_claims, elevated_required, login_required
from ..common.http import json_response, optional_query_param, read_json_body
from ..container import Container
from .excel import XLSX_MIMETYPE, salary_report_to_xlsx
from .model import ModifySalaryConfigurationRequest


def register(app: Flask, container: Container) -> None:
    @app.route("/salary-info", methods=["GET"], endpoint="salary_info")
    @login_required
    def salary_info():
        claims = current_claims()
        lines = container.salary_service.get_salary_information(
            claims,
            month=request.args.get("month"),
            year=request.args.get("year"),
            search_name=optional_query_param("username"),
        )
        report = container.salary_service.build_report(lines)
        if not claims.is_elevated:
            message = "Successful getting user salary information"
        elif optional_query_param("username"):
            message = f"Successful getting user information: {optional_query_param('username')}"
        else:
            message = "Successful getting all user salary information for leader"
        return json_response(message, report)

    @app.route("/modify-salary-configuration", methods=["PUT"], endpoint="modify_salary_configuration")
    @elevated_required
    def modify_salary_configuration():
        req = ModifySalaryConfigurationRequest.from_json(read_json_body())
        container.salary_service.modify_salary_configuration(current_claims(), req)
        return json_response("Salary configuration updated")

    @app.route("/excel-export", methods=["POST"], endpoint="excel_export")
    @login_required
    def excel_export():
        report = read_json_body(expect=list)
        content = salary_report_to_xlsx(report)
        return app.response_class(
            content,
            mimetype=XLSX_MIMETYPE,
            headers={"Content-Disposition": "attachment; filename=salary_report.xlsx"},
        )
