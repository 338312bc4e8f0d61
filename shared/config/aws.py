"""
AWS wiring for the order event channel.

Mirrors the environment contract of the rest of the cluster: a region, an
optional LocalStack endpoint (which also switches to dummy credentials), and
the SNS topic that order events are published to. Leaving SNS_TOPIC_ARN unset
disables publishing entirely.
"""
import os
from dotenv import load_dotenv

load_dotenv()

AWS_REGION = os.getenv("AWS_REGION", "us-east-1")
LOCALSTACK_ENDPOINT = os.getenv("LOCALSTACK_ENDPOINT")
SNS_TOPIC_ARN = os.getenv("SNS_TOPIC_ARN")
SNS_PUBLISH_TIMEOUT = float(os.getenv("SNS_PUBLISH_TIMEOUT", "5"))


def client_kwargs() -> dict:
    """Keyword arguments for aiobotocore's create_client, minus the service name."""
    kwargs = {"region_name": AWS_REGION}
    if LOCALSTACK_ENDPOINT:
        kwargs["endpoint_url"] = LOCALSTACK_ENDPOINT
        kwargs["aws_access_key_id"] = "test"
        kwargs["aws_secret_access_key"] = "test"
    return kwargs
