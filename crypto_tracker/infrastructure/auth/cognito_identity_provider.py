"""
Infrastructure adapter: Amazon Cognito user pool (boto3 cognito-idp) → IIdentityProvider.

The phone number is the Cognito username. The pool has no SMS delivery
configured, so new or unconfirmed users are confirmed with
admin_confirm_sign_up. Cognito failures are mapped to AuthResult messages by
their botocore error code; nothing is raised to the caller.
"""

import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from crypto_tracker.domain.entities.subscriber import AuthResult
from crypto_tracker.domain.ports.identity_port import IIdentityProvider
from crypto_tracker.domain.symbols import mask_phone_number

logger = logging.getLogger(__name__)


def _error_code(exc: Exception) -> Optional[str]:
    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Code")
    return None


def _error_message(exc: Exception) -> str:
    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Message") or str(exc)
    return str(exc)


class CognitoIdentityProvider(IIdentityProvider):
    """Sign-up, confirmation and sign-in against a Cognito user pool app client."""

    def __init__(
        self,
        user_pool_id: str,
        client_id: str,
        region: str = "us-east-1",
        client: Any = None,
    ) -> None:
        self._user_pool_id = user_pool_id
        self._client_id = client_id
        self._client = client or boto3.client("cognito-idp", region_name=region)

    def sign_up(self, phone_number: str, password: str, name: Optional[str] = None) -> AuthResult:
        masked = mask_phone_number(phone_number)
        attributes = [{"Name": "phone_number", "Value": phone_number}]
        if name:
            attributes.append({"Name": "name", "Value": name})

        try:
            response = self._client.sign_up(
                ClientId=self._client_id,
                Username=phone_number,
                Password=password,
                UserAttributes=attributes,
            )
        except (ClientError, BotoCoreError) as exc:
            code = _error_code(exc)
            if code == "UsernameExistsException":
                logger.warning("User already exists: %s", masked)
                return AuthResult(False, "An account with this phone number already exists")
            if code == "InvalidPasswordException":
                logger.warning("Invalid password for %s", masked)
                return AuthResult(False, "Password must be at least 8 characters")
            logger.error("Sign up failed for %s: %s", masked, _error_message(exc))
            return AuthResult(False, f"Sign up failed: {_error_message(exc)}")

        user_sub = response.get("UserSub")
        logger.info("User signed up: %s (sub %s)", masked, user_sub)

        if not response.get("UserConfirmed", False):
            try:
                self._admin_confirm(phone_number)
            except (ClientError, BotoCoreError) as exc:
                logger.warning("Failed to auto-confirm %s: %s", masked, _error_message(exc))

        return AuthResult(
            success=True,
            message="Account created successfully",
            cognito_user_id=user_sub,
        )

    def confirm_sign_up(self, phone_number: str, code: str) -> AuthResult:
        masked = mask_phone_number(phone_number)
        try:
            self._client.confirm_sign_up(
                ClientId=self._client_id,
                Username=phone_number,
                ConfirmationCode=code,
            )
        except (ClientError, BotoCoreError) as exc:
            error = _error_code(exc)
            if error == "CodeMismatchException":
                logger.warning("Invalid verification code for %s", masked)
                return AuthResult(False, "Invalid verification code")
            if error == "ExpiredCodeException":
                logger.warning("Verification code expired for %s", masked)
                return AuthResult(False, "Verification code has expired. Please request a new one.")
            logger.error("Confirm sign up failed for %s: %s", masked, _error_message(exc))
            return AuthResult(False, f"Verification failed: {_error_message(exc)}")

        logger.info("User confirmed: %s", masked)
        return AuthResult(True, "Phone number verified successfully")

    def sign_in(self, phone_number: str, password: str) -> AuthResult:
        return self._sign_in(phone_number, password, confirm_on_failure=True)

    def resend_confirmation_code(self, phone_number: str) -> AuthResult:
        try:
            self._client.resend_confirmation_code(ClientId=self._client_id, Username=phone_number)
        except (ClientError, BotoCoreError) as exc:
            logger.error(
                "Failed to resend code to %s: %s", mask_phone_number(phone_number), _error_message(exc)
            )
            return AuthResult(False, f"Failed to resend code: {_error_message(exc)}")
        return AuthResult(True, "Verification code resent to your phone")

    def get_username_from_token(self, access_token: str) -> Optional[str]:
        try:
            return self._client.get_user(AccessToken=access_token).get("Username")
        except (ClientError, BotoCoreError) as exc:
            logger.error("Failed to get user from token: %s", _error_message(exc))
            return None

    def _sign_in(self, phone_number: str, password: str, confirm_on_failure: bool) -> AuthResult:
        masked = mask_phone_number(phone_number)
        try:
            response = self._client.initiate_auth(
                ClientId=self._client_id,
                AuthFlow="USER_PASSWORD_AUTH",
                AuthParameters={"USERNAME": phone_number, "PASSWORD": password},
            )
        except (ClientError, BotoCoreError) as exc:
            code = _error_code(exc)
            if code == "NotAuthorizedException":
                logger.warning("Invalid credentials for %s", masked)
                return AuthResult(False, "Invalid phone number or password")
            if code == "UserNotFoundException":
                logger.warning("User not found: %s", masked)
                return AuthResult(False, "No account found with this phone number")
            if code == "UserNotConfirmedException" and confirm_on_failure:
                logger.warning("User not confirmed: %s, attempting auto-confirm", masked)
                try:
                    self._admin_confirm(phone_number)
                except (ClientError, BotoCoreError) as confirm_exc:
                    logger.error(
                        "Failed to auto-confirm %s during sign-in: %s",
                        masked, _error_message(confirm_exc),
                    )
                    return AuthResult(
                        False,
                        "Account needs verification. Please contact support.",
                        requires_verification=True,
                    )
                return self._sign_in(phone_number, password, confirm_on_failure=False)
            logger.error("Sign in failed for %s: %s", masked, _error_message(exc))
            return AuthResult(False, f"Sign in failed: {_error_message(exc)}")

        if response.get("ChallengeName"):
            logger.info("Auth challenge required for %s: %s", masked, response["ChallengeName"])
            return AuthResult(False, "Additional verification required", requires_verification=True)

        tokens = response.get("AuthenticationResult") or {}
        logger.info("User signed in: %s", masked)
        return AuthResult(
            success=True,
            message="Sign in successful",
            access_token=tokens.get("AccessToken"),
            refresh_token=tokens.get("RefreshToken"),
        )

    def _admin_confirm(self, phone_number: str) -> None:
        self._client.admin_confirm_sign_up(UserPoolId=self._user_pool_id, Username=phone_number)
        logger.info("User auto-confirmed: %s", mask_phone_number(phone_number))
