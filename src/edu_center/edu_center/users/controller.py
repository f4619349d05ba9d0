from __future__ import annotations

from flask import Flask

from ..auth.gate import current_claims, login_required
from ..common.http import json_response, read_json_body, require_query_param
from ..container import Container
from .model import ModifyUserInformationRequest, RegisterRequest


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        body = read_json_body()
        result = container.auth_service.authenticate(str(body.get("username") or ""), str(body.get("password") or ""))
        return json_response(
            "Login successful",
            {"user": result.user.to_profile(), "token": result.token},
        )

    @app.route("/register", methods=["POST"], endpoint="register")
    def register_user():
        req = RegisterRequest.from_json(read_json_body())
        user_id = container.auth_service.register(req)
        return json_response("Account created", {"user_id": user_id}, status=201)

    @app.route("/user-verification", methods=["POST"], endpoint="user_verification")
    @login_required
    def user_verification():
        body = read_json_body()
        user = container.user_service.get_user(
            username=str(body.get("username") or ""),
            email=str(body.get("email") or ""),
            user_id=str(body.get("id") or ""),
        )
        if user is None:
            return json_response("No user matches the request", {"user": None})
        return json_response("Success getting the user data", {"user": user.to_profile()})

    @app.route("/change-password", methods=["PUT"], endpoint="change_password")
    @login_required
    def change_password():
        body = read_json_body()
        container.user_service.change_password(
            current_claims(),
            old_password=str(body.get("old_password") or ""),
            new_password=str(body.get("new_password") or ""),
        )
        return json_response("Password changed")

    @app.route("/modify-user-info", methods=["PUT"], endpoint="modify_user_info")
    @login_required
    def modify_user_info():
        req = ModifyUserInformationRequest.from_json(read_json_body())
        # Identity comes from the token, never from the body.
        container.user_service.modify_user_information(current_claims(), req)
        return json_response("Successful update user information")

    @app.route("/sort-role", methods=["GET"], endpoint="sort_role")
    @login_required
    def sort_role():
        job_position = require_query_param("job_position")
        users = container.user_service.list_by_job_position(job_position)
        return json_response(f"Successful get {job_position}", [u.to_profile() for u in users])
