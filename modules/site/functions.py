"""
Site Module Functions
Dispatches the deployment to the static_site or s3_website module
"""

import pulumi
from typing import Dict

from modules.dns.functions import lookup_zone_id
from modules.s3_website.functions import create_s3_website_resources
from modules.static_site.functions import create_static_site_resources


def resolve_zone_id(config) -> str:
    """Configured hosted zone, or the public zone for the DNS suffix"""
    return config.hosted_zone_id or lookup_zone_id(config.dns_suffix)


def create_site(config) -> Dict[str, any]:
    """
    Create the site with the module named by config.site_module

    Args:
        config: Deployment configuration

    Returns:
        Dict with the selected module's resources and outputs
    """
    zone_id = resolve_zone_id(config)
    pulumi.log.info(f"Deploying {config.fqdn} with the {config.site_module} module")

    common = dict(
        name=config.site_name,
        fqdn=config.fqdn,
        fastly_fqdn=config.fastly_fqdn,
        zone_id=zone_id,
        site_dir=config.site_dir,
        environment=config.deploy_environment,
        tags=config.common_tags,
        dns_ttl=config.dns_ttl,
        index_document=config.index_document,
        error_document=config.error_document
    )

    if config.site_module == "static_site":
        return create_static_site_resources(
            content_dir=config.content_dir,
            build_command=config.build_command,
            **common
        )
    if config.site_module == "s3_website":
        return create_s3_website_resources(
            deploy_steps=config.deploy_step_list,
            **common
        )
    raise ValueError(f"Unknown site_module '{config.site_module}'")
