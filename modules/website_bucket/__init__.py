"""
Website Bucket Module
Public S3 bucket configured for static website hosting
"""

from .functions import (
    create_website_bucket,
    guess_content_type,
    list_site_files,
    public_read_policy,
    upload_site_content
)
