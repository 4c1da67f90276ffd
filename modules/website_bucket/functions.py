"""
Website Bucket Module Functions
Creates a public S3 website bucket and uploads prebuilt site content
"""

import json
import mimetypes
import os
import pulumi
import pulumi_aws as aws
from typing import Dict, List, Tuple


def public_read_policy(bucket_arn: str) -> str:
    """
    Render a bucket policy allowing anonymous reads of every object

    Args:
        bucket_arn: ARN of the website bucket

    Returns:
        Policy document as JSON
    """
    return json.dumps({
        "Version": "2012-10-17",
        "Statement": [{
            "Sid": "PublicReadGetObject",
            "Effect": "Allow",
            "Principal": "*",
            "Action": "s3:GetObject",
            "Resource": f"{bucket_arn}/*"
        }]
    })


def create_website_bucket(name: str, bucket_name: str, index_document: str = "index.html",
                          error_document: str = "404.html", tags: Dict[str, str] = None) -> Dict[str, any]:
    """
    Create S3 bucket configured for static website hosting

    Args:
        name: Resource name prefix
        bucket_name: S3 bucket name (the site FQDN)
        index_document: Index document suffix
        error_document: Error document key
        tags: Additional tags

    Returns:
        Dict with bucket resources and outputs
    """
    tags = tags or {}

    bucket = aws.s3.Bucket(
        f"{name}-site-bucket",
        bucket=bucket_name,
        force_destroy=True,
        tags={
            **tags,
            "Name": bucket_name,
            "Module": "website-bucket"
        }
    )

    website = aws.s3.BucketWebsiteConfiguration(
        f"{name}-site-website",
        bucket=bucket.id,
        index_document=aws.s3.BucketWebsiteConfigurationIndexDocumentArgs(
            suffix=index_document
        ),
        error_document=aws.s3.BucketWebsiteConfigurationErrorDocumentArgs(
            key=error_document
        )
    )

    # Public policies must be allowed before the read policy can attach
    public_access = aws.s3.BucketPublicAccessBlock(
        f"{name}-site-pab",
        bucket=bucket.id,
        block_public_acls=True,
        block_public_policy=False,
        ignore_public_acls=True,
        restrict_public_buckets=False
    )

    policy = aws.s3.BucketPolicy(
        f"{name}-site-policy",
        bucket=bucket.id,
        policy=bucket.arn.apply(public_read_policy),
        opts=pulumi.ResourceOptions(depends_on=[public_access])
    )

    return {
        "bucket_id": bucket.id,
        "bucket_name": bucket.bucket,
        "bucket_arn": bucket.arn,
        "website_endpoint": website.website_endpoint,
        "_bucket": bucket,
        "_website": website,
        "_public_access": public_access,
        "_policy": policy
    }


def list_site_files(content_dir: str) -> List[Tuple[str, str]]:
    """
    List files to upload as (object key, local path) pairs

    Raises:
        FileNotFoundError: if content_dir does not exist
    """
    if not os.path.isdir(content_dir):
        raise FileNotFoundError(f"Site content directory not found: {content_dir}")

    files = []
    for root, _dirs, filenames in os.walk(content_dir):
        for filename in filenames:
            path = os.path.join(root, filename)
            if not os.path.isfile(path):
                continue
            key = os.path.relpath(path, content_dir).replace(os.sep, "/")
            files.append((key, path))
    return sorted(files)


def guess_content_type(path: str) -> str:
    content_type, _ = mimetypes.guess_type(path)
    return content_type or "application/octet-stream"


def upload_site_content(name: str, bucket_id: 'pulumi.Output[str]', content_dir: str,
                        tags: Dict[str, str] = None) -> List[aws.s3.BucketObjectv2]:
    """
    Declare one bucket object per file in the built site

    Args:
        name: Resource name prefix
        bucket_id: Website bucket ID
        content_dir: Directory holding the built site
        tags: Additional tags

    Returns:
        List of bucket object resources
    """
    tags = tags or {}

    objects = []
    for key, path in list_site_files(content_dir):
        objects.append(aws.s3.BucketObjectv2(
            f"{name}-content-{key}",
            bucket=bucket_id,
            key=key,
            source=pulumi.FileAsset(path),
            content_type=guess_content_type(path),
            tags={**tags, "Module": "website-bucket"}
        ))
    return objects
