"""Tests for app.api.deps: bearer authentication and role authorization."""

import unittest
from datetime import UTC, datetime, timedelta
from typing import Annotated
from unittest.mock import MagicMock

from db_helpers import (
    admin_token,
    auth_header,
    clear_overrides,
    make_client,
    make_session_factory,
    register,
    user_directory,
)
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.testclient import TestClient

from app.api.deps import get_current_identity, require_roles
from app.core.security import TOKEN_EXPIRE_HOURS, create_access_token
from app.schemas.auth import TokenClaims

ME = "/api/v1/auth/me"
USERS = "/api/v1/users"


def _claims(*values: str) -> TokenClaims:
    return TokenClaims(
        email="a@x.com",
        id=1,
        roles=[{"id": i, "value": v, "description": v} for i, v in enumerate(values, start=1)],
        iat=0,
        exp=1,
    )


class TestRequireRoles(unittest.TestCase):
    """require_roles only inspects claims; the token was already verified."""

    def test_no_required_roles_allows(self) -> None:
        identity = _claims()
        self.assertIs(require_roles()(identity), identity)

    def test_user_only_denied_for_admin(self) -> None:
        with self.assertRaises(HTTPException) as ctx:
            require_roles("ADMIN")(_claims("USER"))
        self.assertEqual(ctx.exception.status_code, 403)

    def test_user_and_admin_allowed(self) -> None:
        identity = _claims("USER", "ADMIN")
        self.assertIs(require_roles("ADMIN")(identity), identity)

    def test_any_of_required_roles_is_enough(self) -> None:
        identity = _claims("EDITOR")
        self.assertIs(require_roles("ADMIN", "EDITOR")(identity), identity)

    def test_error_reading_claims_is_forbidden(self) -> None:
        identity = MagicMock()
        identity.role_values.side_effect = RuntimeError("broken claims")
        with self.assertRaises(HTTPException) as ctx:
            require_roles("ADMIN")(identity)
        self.assertEqual(ctx.exception.status_code, 403)


class TestAuthenticationGuard(unittest.TestCase):
    def setUp(self) -> None:
        self.factory = make_session_factory()
        self.client = make_client(self.factory)

    def tearDown(self) -> None:
        clear_overrides()

    def _assert_not_authenticated(self, headers: dict[str, str]) -> None:
        response = self.client.get(ME, headers=headers)
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["detail"], "Not authenticated")

    def test_valid_token_exposes_claims(self) -> None:
        token = register(self.client, "a@x.com")
        response = self.client.get(ME, headers=auth_header(token))
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["email"], "a@x.com")
        self.assertEqual([role["value"] for role in body["roles"]], ["USER"])

    def test_missing_header_rejected(self) -> None:
        self._assert_not_authenticated({})

    def test_basic_scheme_rejected(self) -> None:
        self._assert_not_authenticated({"Authorization": "Basic xyz"})

    def test_bearer_without_token_rejected(self) -> None:
        self._assert_not_authenticated({"Authorization": "Bearer"})

    def test_malformed_token_rejected(self) -> None:
        self._assert_not_authenticated(auth_header("not-a-token"))

    def test_expired_token_rejected_with_same_message(self) -> None:
        issued = datetime.now(UTC) - timedelta(hours=TOKEN_EXPIRE_HOURS + 1)
        token = create_access_token(
            user_id=1,
            email="a@x.com",
            roles=[{"id": 1, "value": "USER", "description": "Regular user"}],
            issued_at=issued,
        )
        self._assert_not_authenticated(auth_header(token))


class TestRoleGuardOverHttp(unittest.TestCase):
    def setUp(self) -> None:
        self.factory = make_session_factory()
        self.client = make_client(self.factory)

    def tearDown(self) -> None:
        clear_overrides()

    def test_user_role_forbidden_on_admin_endpoint(self) -> None:
        token = register(self.client, "a@x.com")
        response = self.client.get(USERS, headers=auth_header(token))
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["detail"], "Forbidden")

    def test_admin_allowed(self) -> None:
        token = admin_token(self.client, self.factory)
        response = self.client.get(USERS, headers=auth_header(token))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            sorted(role["value"] for role in response.json()[0]["roles"]), ["ADMIN", "USER"]
        )

    def test_unauthenticated_request_to_admin_endpoint_is_401(self) -> None:
        response = self.client.get(USERS)
        self.assertEqual(response.status_code, 401)

    def test_role_claims_are_read_from_token_not_database(self) -> None:
        # A token issued before the role was granted keeps its old claims until it expires.
        stale = register(self.client, "a@x.com")
        with self.factory() as session:
            users = user_directory(session)
            users.attach_role(users.find_by_email("a@x.com").id, "ADMIN")
        self.assertEqual(self.client.get(USERS, headers=auth_header(stale)).status_code, 403)
        fresh = self.client.post(
            "/api/v1/auth/login", json={"email": "a@x.com", "password": "pass1"}
        ).json()["token"]
        self.assertEqual(self.client.get(USERS, headers=auth_header(fresh)).status_code, 200)


class TestIdentityOnRequestState(unittest.TestCase):
    """get_current_identity attaches the verified claims to request.state.identity."""

    def setUp(self) -> None:
        app = FastAPI()
        self.seen: dict[str, object] = {}

        @app.get("/whoami")
        def whoami(
            request: Request,
            identity: Annotated[TokenClaims, Depends(get_current_identity)],
        ) -> dict[str, str]:
            self.seen["state"] = request.state.identity
            self.seen["returned"] = identity
            return {"email": request.state.identity.email}

        self.client = TestClient(app)

    def test_claims_stored_on_request_state(self) -> None:
        token = create_access_token(
            user_id=3,
            email="a@x.com",
            roles=[{"id": 1, "value": "USER", "description": "Regular user"}],
        )
        response = self.client.get("/whoami", headers=auth_header(token))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"email": "a@x.com"})
        self.assertIsInstance(self.seen["state"], TokenClaims)
        self.assertIs(self.seen["state"], self.seen["returned"])
        self.assertEqual(self.seen["state"].id, 3)

    def test_rejected_request_never_reaches_route(self) -> None:
        response = self.client.get("/whoami", headers={"Authorization": "Basic xyz"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(self.seen, {})


if __name__ == "__main__":
    unittest.main()
