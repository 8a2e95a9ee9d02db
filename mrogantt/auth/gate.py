"""Shared-secret access gate evaluated before the render endpoint runs."""
from __future__ import annotations

import hmac
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

TRUSTED_PRINCIPAL = "trusted-client"
UNAUTHORIZED_PRINCIPAL = "unauthorized"


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    principal: str


def check_secret(supplied: Optional[str], expected: Optional[str]) -> AccessDecision:
    """Compare the caller's secret with the configured one in constant time.

    A missing header or an unconfigured secret always denies.
    """

    if not supplied or not expected:
        return AccessDecision(False, UNAUTHORIZED_PRINCIPAL)
    if hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8")):
        return AccessDecision(True, TRUSTED_PRINCIPAL)
    return AccessDecision(False, UNAUTHORIZED_PRINCIPAL)


def header_value(headers: Optional[Mapping[str, Any]], name: str) -> Optional[str]:
    if not headers:
        return None
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def build_policy(decision: AccessDecision, resource: Optional[str] = None) -> Dict[str, Any]:
    """Render ``decision`` as an API Gateway authorizer response."""

    return {
        "principalId": "user",
        "policyDocument": {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Action": "execute-api:Invoke",
                    "Effect": "Allow" if decision.allowed else "Deny",
                    "Resource": resource or "*",
                }
            ],
        },
        "context": {"user": decision.principal},
    }
