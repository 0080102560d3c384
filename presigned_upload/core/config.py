"""
Application configuration using Pydantic Settings
"""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """Upload settings with environment variable support"""

    # AWS S3 Settings
    aws_s3_bucket: str = ""
    aws_s3_region: str = "us-east-2"
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    aws_s3_prefix: str = ""  # S3 object key prefix for uploads
    aws_s3_endpoint_url: Optional[str] = None
    aws_s3_use_ssl: bool = True
    """
    AWS S3 configuration for presigned POST uploads.
    aws_s3_bucket: S3 bucket name
    aws_s3_region: S3 region
    aws_s3_endpoint_url: base URL of an S3-compatible server (path-style);
        leave empty for AWS virtual-hosted endpoints
    """

    # Upload Settings
    upload_default_acl: str = "public-read"
    upload_private_acl: str = "private"
    upload_default_content_type: str = "binary/octet-stream"
    upload_policy_expiry_minutes: int = 15
    upload_chunk_size: int = 64 * 1024  # 64KB per progress tick

    # HTTP Client Settings (seconds)
    http_connect_timeout: float = 30
    http_read_timeout: float = 30
    http_send_timeout: float = 4 * 60 * 60  # 4 hours for very large files

    # Logging Settings
    log_level: str = "INFO"
    log_format: str = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"

    @field_validator("aws_s3_endpoint_url")
    @classmethod
    def normalize_endpoint_url(cls, v):
        """Treat an empty endpoint as unset and strip trailing slashes.

        Example:
            >>> normalize_endpoint_url("http://localhost:9000/")
            'http://localhost:9000'
        """
        if v is None:
            return None
        v = v.strip().rstrip("/")
        return v or None

    @field_validator("upload_policy_expiry_minutes", "upload_chunk_size")
    @classmethod
    def must_be_positive(cls, v):
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def has_aws_credentials(self) -> bool:
        """True when bucket and both halves of the key pair are configured."""
        return bool(
            self.aws_s3_bucket and self.aws_access_key_id and self.aws_secret_access_key
        )


# Global settings instance
settings = Settings()
