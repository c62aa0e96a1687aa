"""Storage source configuration schemas for bucket-browser."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class S3SourceConfig(BaseModel):
    """Configuration for one named S3-compatible storage source."""

    model_config = ConfigDict(extra="forbid")

    region: str = Field(..., min_length=1, description="AWS region")
    endpoint_url: Optional[str] = Field(
        default=None, description="Custom S3 endpoint URL"
    )
    path_style_access: bool = Field(
        default=True, description="Address buckets as path segments"
    )
    access_key: Optional[str] = Field(default=None, description="AWS access key ID")
    secret_key: Optional[str] = Field(default=None, description="AWS secret access key")
    session_token: Optional[str] = Field(default=None, description="AWS session token")
    aws_profile: Optional[str] = Field(default=None, description="AWS profile name")
    default_bucket: str = Field(..., min_length=1, description="Bucket shown first")
    display_name: Optional[str] = Field(
        default=None, description="Human readable source name"
    )
