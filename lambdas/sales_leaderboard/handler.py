import base64
import hmac
import json
import logging
import os
import urllib.parse
from functools import lru_cache

import boto3

from .commands import handle_command
from .formatting import GENERIC_ERROR, ephemeral
from .kv_store import DEFAULT_NAMESPACE, DynamoDBStore, InMemoryStore


def log_level(name: str | None) -> int:
    level = logging.getLevelName((name or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


logger = logging.getLogger()
logger.setLevel(log_level(os.environ.get("LOG_LEVEL")))

_store = None


def get_store():
    global _store
    if _store is None:
        table = os.environ.get("RECORDS_TABLE")
        if table:
            _store = DynamoDBStore(table, os.environ.get("KV_NAMESPACE", DEFAULT_NAMESPACE))
        else:
            logger.warning({"store": "memory", "reason": "RECORDS_TABLE not set; records will not persist"})
            _store = InMemoryStore()
    return _store


@lru_cache(maxsize=None)
def secrets_client():
    return boto3.client("secretsmanager")


# cached for the life of the warm container
@lru_cache(maxsize=None)
def get_secret_value(name: str) -> str:
    resp = secrets_client().get_secret_value(SecretId=name)
    if "SecretString" in resp:
        return resp["SecretString"]
    # botocore hands back SecretBinary already base64-decoded
    return resp["SecretBinary"].decode()


def expected_token() -> str | None:
    token = os.environ.get("SLACK_VERIFICATION_TOKEN")
    if token:
        return token
    secret_name = os.environ.get("SLACK_TOKEN_SECRET_NAME")
    if secret_name:
        return get_secret_value(secret_name)
    return None


def request_method(event: dict) -> str:
    http = (event.get("requestContext") or {}).get("http") or {}
    return (http.get("method") or event.get("httpMethod") or "").upper()


def form_params(event: dict) -> dict:
    # Slack sends application/x-www-form-urlencoded for slash commands
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode()
    return urllib.parse.parse_qs(body, keep_blank_values=True)


def plain(status: int, text: str) -> dict:
    return {"statusCode": status, "headers": {"Content-Type": "text/plain"}, "body": text}


def slack_response(payload: dict) -> dict:
    return {
        "statusCode": 200,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(payload),
    }


def handler(event, context):
    if request_method(event) != "POST":
        return plain(405, "Method not allowed")

    try:
        params = form_params(event)
        text = (params.get("text", [""]) or [""])[0]
        token = (params.get("token", [""]) or [""])[0]

        expected = expected_token()
        if expected and not hmac.compare_digest(token.encode(), expected.encode()):
            logger.warning({"unauthorized": True, "team": (params.get("team_domain", [""]) or [""])[0]})
            return plain(401, "Unauthorized")

        return slack_response(handle_command(text, get_store()))
    except Exception as e:
        logger.exception({"error": str(e)})
        return slack_response(ephemeral(GENERIC_ERROR))
