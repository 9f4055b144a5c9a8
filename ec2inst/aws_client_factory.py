"""
AWS Client Factory Module
Creates the boto3 EC2 client used for DescribeInstances.

Credentials come from an optional .env file when it defines them, otherwise
from the standard boto3 chain (instance profile, environment, shared config).
"""

import logging
import os
from pathlib import Path
from typing import Optional

import boto3
from dotenv import load_dotenv


def _resolve_env_path(env_path: Optional[str] = None) -> str:
    """
    Determine which .env file should be consulted for AWS credentials.

    Priority order:
      1. Explicit parameter
      2. AWS_ENV_FILE environment variable
      3. ~/.env
    """
    if env_path:
        return env_path
    aws_env_file = os.environ.get("AWS_ENV_FILE")
    if aws_env_file:
        return aws_env_file
    return str(Path.home() / ".env")


def load_credentials_from_env(env_path: Optional[str] = None) -> Optional[tuple[str, str]]:
    """
    Load AWS credentials from a .env file if it provides them.

    Args:
        env_path: Optional override path (defaults to ~/.env)

    Returns:
        tuple: (aws_access_key_id, aws_secret_access_key), or None when the
        ambient credential chain should be used instead
    """
    resolved_path = _resolve_env_path(env_path)
    if Path(resolved_path).is_file():
        load_dotenv(resolved_path)

    aws_access_key_id = os.getenv("AWS_ACCESS_KEY_ID")
    aws_secret_access_key = os.getenv("AWS_SECRET_ACCESS_KEY")
    if aws_access_key_id and aws_secret_access_key:
        logging.info("AWS credentials loaded from environment (%s)", resolved_path)
        return aws_access_key_id, aws_secret_access_key

    logging.info("No explicit AWS credentials found, using the default credential chain")
    return None


def create_client(service_name: str, region: Optional[str] = None):
    """
    Create a boto3 client, passing explicit credentials only when available.

    Args:
        service_name: AWS service name (e.g., 'ec2')
        region: AWS region name

    Returns:
        boto3.client: Configured AWS service client
    """
    client_kwargs = {}
    credentials = load_credentials_from_env()
    if credentials is not None:
        aws_access_key_id, aws_secret_access_key = credentials
        client_kwargs["aws_access_key_id"] = aws_access_key_id
        client_kwargs["aws_secret_access_key"] = aws_secret_access_key
        aws_session_token = os.getenv("AWS_SESSION_TOKEN")
        if aws_session_token:
            client_kwargs["aws_session_token"] = aws_session_token

    if region is not None:
        client_kwargs["region_name"] = region

    return boto3.client(service_name, **client_kwargs)


def create_ec2_client(region: str):
    """Create an EC2 boto3 client for the instance's region."""
    return create_client("ec2", region)
