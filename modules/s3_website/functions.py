"""
S3 Website Module Functions
Bare S3 website bucket whose content is pushed by local deploy steps
"""

import pulumi
from typing import Dict, List

from ci.environment import base_environment
from ci.runner import run
from modules.dns.functions import create_cdn_record
from modules.website_bucket.functions import create_website_bucket


def run_deploy_steps(bucket_name: str, site_dir: str, deploy_steps: List[str],
                     environment: Dict[str, str] = None) -> bool:
    """
    Run each deploy step in order with BUCKET_NAME set; the first failure stops the rest

    Returns:
        True if the steps ran, False during previews
    """
    if pulumi.runtime.is_dry_run():
        pulumi.log.info("Preview: skipping deploy steps")
        return False

    env = base_environment()
    env.update(environment or {})
    env["BUCKET_NAME"] = bucket_name

    for step in deploy_steps:
        pulumi.log.info(f"Deploy step in {site_dir}: {step}")
        run(step, cwd=site_dir, env=env)
    return True


def create_s3_website_resources(name: str, fqdn: str, fastly_fqdn: str, zone_id: str,
                                site_dir: str, deploy_steps: List[str],
                                environment: Dict[str, str] = None, tags: Dict[str, str] = None,
                                dns_ttl: int = 300, index_document: str = "index.html",
                                error_document: str = "404.html") -> Dict[str, any]:
    """
    Create S3 website bucket and DNS record, then run the deploy steps

    Args:
        name: Resource name prefix
        fqdn: Site hostname, also the bucket name
        fastly_fqdn: Fastly hostname serving the site
        zone_id: Route53 hosted zone ID
        site_dir: Directory the deploy steps run in
        deploy_steps: Shell commands run once the bucket exists
        environment: Extra environment for the deploy steps
        tags: Additional tags for all resources
        dns_ttl: CNAME TTL in seconds
        index_document: Index document suffix
        error_document: Error document key

    Returns:
        Dict with all site resources and outputs
    """
    tags = tags or {}
    deploy_steps = list(deploy_steps)

    bucket_result = create_website_bucket(name, fqdn, index_document, error_document, tags)
    dns_result = create_cdn_record(name, fqdn, fastly_fqdn, zone_id, dns_ttl)

    # Waits for the website configuration and public-read policy, not just the bucket.
    # Steps re-run on every `pulumi up`; they must be idempotent.
    deployed = pulumi.Output.all(
        bucket_result["bucket_name"],
        bucket_result["website_endpoint"],
        bucket_result["_policy"].id
    ).apply(lambda args: run_deploy_steps(args[0], site_dir, deploy_steps, environment))

    return {
        "bucket_name": bucket_result["bucket_name"],
        "website_endpoint": bucket_result["website_endpoint"],
        "site_fqdn": dns_result["fqdn"],
        "cdn_target": dns_result["target"],
        "deploy_steps": deploy_steps,
        "deployed": deployed,
        # Keep references to resources for dependencies
        "_bucket": bucket_result,
        "_record": dns_result["record"]
    }
