from __future__ import annotations
import boto3
from .config import settings

def bedrock_client():
    """Bedrock control plane (guardrail management), not model invocation."""
    return boto3.client("bedrock", region_name=settings.aws_region)
