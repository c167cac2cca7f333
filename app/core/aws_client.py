# core/aws_client.py
"""
Centralized AWS client factory to ensure proper credential handling.
Outside Lambda, explicit keys from settings / environment are used; inside
Lambda they are normally absent and boto3 falls back to the execution role.
"""
import boto3
from core.config import settings
from core.logger import logger
import os


def _credential_kwargs() -> dict:
    """Collect explicit credentials from settings (which loads from .env) or environment."""
    return {
        "aws_access_key_id": getattr(settings, 'AWS_ACCESS_KEY_ID', None) or os.getenv('AWS_ACCESS_KEY_ID'),
        "aws_secret_access_key": getattr(settings, 'AWS_SECRET_ACCESS_KEY', None) or os.getenv('AWS_SECRET_ACCESS_KEY'),
        "aws_session_token": getattr(settings, 'AWS_SESSION_TOKEN', None) or os.getenv('AWS_SESSION_TOKEN'),
    }


def get_sqs_client():
    """Get SQS client with proper credentials."""
    try:
        client = boto3.client(
            "sqs",
            region_name=settings.SQS_REGION,
            **_credential_kwargs()
        )
        logger.info("SQS client initialized")
        return client
    except Exception as e:
        logger.error(f"Failed to initialize SQS client: {str(e)}")
        raise
