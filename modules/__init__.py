"""
Pulumi modules for the Habitat website
Simple function-based approach following Pulumi best practices
"""

from .website_bucket import create_website_bucket, upload_site_content
from .dns import create_cdn_record, lookup_zone_id
from .static_site import create_static_site_resources
from .s3_website import create_s3_website_resources
from .site import create_site

__all__ = [
    "create_website_bucket",
    "upload_site_content",
    "create_cdn_record",
    "lookup_zone_id",
    "create_static_site_resources",
    "create_s3_website_resources",
    "create_site"
]
