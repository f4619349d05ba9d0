from datetime import datetime, timedelta, timezone

import pytest
from flask import Flask
from jose import jwt

from edu_center.auth.gate import TOKEN_SERVICE_KEY, current_claims, elevated_required, login_required
from edu_center.auth.tokens import TokenService
from edu_center.common.http import json_response, register_error_handlers
from edu_center.core.enums import Role
from edu_center.core.exceptions import AuthenticationError


def test_issue_then_decode_returns_claims(tokens, users_repo):
    leader = users_repo.get_by_id("u-leader")

    claims = tokens.decode(tokens.issue(leader))

    assert claims.user_id == "u-leader"
    assert claims.role is Role.LEADER
    assert claims.display_name == "Lan Leader"
    assert claims.is_elevated


def test_unknown_role_falls_back_to_least_privilege():
    token = jwt.encode({"sub": "u-x", "name": "X", "role": "superuser"}, "test-secret", algorithm="HS256")

    claims = TokenService("test-secret").decode(token)

    assert claims.role is Role.USER
    assert not claims.is_elevated


def test_missing_name_claim_is_rejected():
    token = jwt.encode({"sub": "u-x", "role": "admin"}, "test-secret", algorithm="HS256")

    with pytest.raises(AuthenticationError):
        TokenService("test-secret").decode(token)


def test_token_signed_with_other_key_is_rejected(users_repo):
    token = TokenService("other-secret").issue(users_repo.get_by_id("u-admin"))

    with pytest.raises(AuthenticationError):
        TokenService("test-secret").decode(token)


def test_expired_token_is_rejected(tokens, users_repo):
    issued = datetime.now(timezone.utc) - timedelta(hours=1)
    token = tokens.issue(users_repo.get_by_id("u-admin"), now=issued)

    with pytest.raises(AuthenticationError):
        tokens.decode(token)


def test_role_parse_is_case_insensitive():
    assert Role.parse("ADMIN") is Role.ADMIN
    assert Role.parse(" leader ") is Role.LEADER
    assert Role.parse(None) is Role.USER


@pytest.fixture
def gated_app(tokens):
    app = Flask(__name__)
    app.extensions[TOKEN_SERVICE_KEY] = tokens
    register_error_handlers(app)

    @app.route("/me")
    @login_required
    def me():
        return json_response("ok", {"user_id": current_claims().user_id})

    @app.route("/leaders-only")
    @elevated_required
    def leaders_only():
        return json_response("ok")

    @app.route("/ungated")
    def ungated():
        return json_response("ok", {"user_id": current_claims().user_id})

    return app


def test_gate_rejects_missing_and_malformed_headers(gated_app):
    client = gated_app.test_client()

    assert client.get("/me").status_code == 401
    assert client.get("/me", headers={"Authorization": "Token abc"}).status_code == 401
    assert client.get("/me", headers={"Authorization": "Bearer not-a-jwt"}).status_code == 401


def test_gate_attaches_claims(gated_app, auth_headers):
    resp = gated_app.test_client().get("/me", headers=auth_headers("u-teacher"))

    assert resp.status_code == 200
    assert resp.get_json()["data"] == {"user_id": "u-teacher"}


def test_elevated_gate_denies_plain_user(gated_app, auth_headers):
    client = gated_app.test_client()

    assert client.get("/leaders-only", headers=auth_headers("u-teacher")).status_code == 403
    assert client.get("/leaders-only", headers=auth_headers("u-leader")).status_code == 200
    assert client.get("/leaders-only", headers=auth_headers("u-admin")).status_code == 200


def test_claims_are_absent_without_the_gate(gated_app, auth_headers):
    resp = gated_app.test_client().get("/ungated", headers=auth_headers("u-admin"))

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False
