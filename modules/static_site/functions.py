"""
Static Site Module Functions
Builds the site, hosts the output in S3 and points DNS at the CDN
"""

import os
import pulumi
from typing import Dict

from ci.environment import base_environment
from ci.runner import run
from modules.dns.functions import create_cdn_record
from modules.website_bucket.functions import create_website_bucket, upload_site_content


def run_build(build_command: str, site_dir: str, environment: Dict[str, str] = None) -> bool:
    """
    Run the site build command; skipped during previews

    Returns:
        True if the build ran
    """
    if pulumi.runtime.is_dry_run():
        pulumi.log.info(f"Preview: skipping build command '{build_command}'")
        return False

    env = base_environment()
    env.update(environment or {})
    pulumi.log.info(f"Building site in {site_dir}: {build_command}")
    run(build_command, cwd=site_dir, env=env)
    return True


def create_static_site_resources(name: str, fqdn: str, fastly_fqdn: str, zone_id: str,
                                 site_dir: str, content_dir: str, build_command: str,
                                 environment: Dict[str, str] = None, tags: Dict[str, str] = None,
                                 dns_ttl: int = 300, index_document: str = "index.html",
                                 error_document: str = "404.html") -> Dict[str, any]:
    """
    Create complete static site deployment

    Args:
        name: Resource name prefix
        fqdn: Site hostname, also the bucket name
        fastly_fqdn: Fastly hostname serving the site
        zone_id: Route53 hosted zone ID
        site_dir: Directory the build command runs in
        content_dir: Directory holding the built site
        build_command: Shell command producing content_dir
        environment: Extra environment for the build
        tags: Additional tags for all resources
        dns_ttl: CNAME TTL in seconds
        index_document: Index document suffix
        error_document: Error document key

    Returns:
        Dict with all site resources and outputs
    """
    tags = tags or {}

    built = run_build(build_command, site_dir, environment)

    bucket_result = create_website_bucket(name, fqdn, index_document, error_document, tags)

    if built or os.path.isdir(content_dir):
        objects = upload_site_content(name, bucket_result["bucket_id"], content_dir, tags)
    else:
        pulumi.log.warn(f"Site content {content_dir} not built yet; objects are uploaded on update")
        objects = []

    dns_result = create_cdn_record(name, fqdn, fastly_fqdn, zone_id, dns_ttl)

    return {
        "bucket_name": bucket_result["bucket_name"],
        "website_endpoint": bucket_result["website_endpoint"],
        "site_fqdn": dns_result["fqdn"],
        "cdn_target": dns_result["target"],
        "object_count": len(objects),
        # Keep references to resources for dependencies
        "_bucket": bucket_result,
        "_objects": objects,
        "_record": dns_result["record"]
    }
