"""
Configuration management for the Habitat website deployment
"""

import pulumi
from typing import Dict, List

SITE_MODULES = ("static_site", "s3_website")


class Config:
    """Centralized configuration management for the website deployment"""

    def __init__(self):
        self.config = pulumi.Config()

        # AWS Configuration
        self.aws_region = self.config.get("aws:region") or "us-west-2"

        # Site selection
        self.site_name = self.config.get("site_name") or "habitat-website"
        self.site_module = self.config.get("site_module") or "static_site"
        if self.site_module not in SITE_MODULES:
            raise ValueError(
                f"Unknown site_module '{self.site_module}', expected one of: {', '.join(SITE_MODULES)}"
            )

        # DNS / CDN
        self.subdomain = self.config.get("subdomain")
        if self.subdomain is None:
            self.subdomain = "www"
        self.dns_suffix = self.config.require("dns_suffix").strip(".")
        self.fastly_fqdn = self.config.require("fastly_fqdn").strip(".")
        self.hosted_zone_id = self.config.get("hosted_zone_id")
        self.dns_ttl = self.config.get_int("dns_ttl") or 300

        # Site content and build
        self.site_dir = self.config.get("site_dir") or "www"
        self.content_dir = self.config.get("content_dir") or "www/build"
        self.build_command = self.config.get("build_command") or "make build"
        self.deploy_steps = self.config.get_object("deploy_steps") or ["make build", "make deploy"]
        if not isinstance(self.deploy_steps, list):
            raise ValueError(
                f"deploy_steps must be a list of commands, got {type(self.deploy_steps).__name__}"
            )
        self.index_document = self.config.get("index_document") or "index.html"
        self.error_document = self.config.get("error_document") or "404.html"

        # Release / ownership metadata
        self.release_channel = self.config.get("release_channel") or "stable"
        self.department = self.config.get("department") or "habitat"
        self.contact = self.config.get("contact") or "habitat@chef.io"

        # Additional tags
        self.additional_tags = self.config.get_object("tags") or {}

    @property
    def fqdn(self) -> str:
        """Fully qualified name the site is served under"""
        subdomain = self.subdomain.strip(".")
        if not subdomain:
            return self.dns_suffix
        return f"{subdomain}.{self.dns_suffix}"

    @property
    def common_tags(self) -> Dict[str, str]:
        """Get common tags for all resources"""
        base_tags = {
            "Department": self.department,
            "Contact": self.contact,
            "ReleaseChannel": self.release_channel,
            "Project": self.site_name,
            "ManagedBy": "pulumi",
        }
        base_tags.update(self.additional_tags)
        return base_tags

    @property
    def deploy_environment(self) -> Dict[str, str]:
        """Environment handed to build and deploy commands"""
        return {
            "RELEASE_CHANNEL": self.release_channel,
            "DNS_SUFFIX": self.dns_suffix,
            "FASTLY_FQDN": self.fastly_fqdn,
            "SITE_FQDN": self.fqdn,
            "AWS_REGION": self.aws_region,
        }

    @property
    def deploy_step_list(self) -> List[str]:
        return [str(step) for step in self.deploy_steps]


def get_config() -> Config:
    """Get the global configuration instance"""
    return Config()
