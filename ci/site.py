"""
Website build and deploy cycle driven through make
"""

from typing import Dict, Mapping, Optional

from .environment import base_environment
from .runner import UsageError, run, section
from .settings import AgentSettings


def site_environment(settings: AgentSettings, environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    env = base_environment(environ)
    env["RELEASE_CHANNEL"] = settings.release_channel
    if settings.dns_suffix:
        env["DNS_SUFFIX"] = settings.dns_suffix
    if settings.fastly_fqdn:
        env["FASTLY_FQDN"] = settings.fastly_fqdn
    return env


def build_site(site_dir: str, settings: AgentSettings, environ: Optional[Mapping[str, str]] = None) -> None:
    section(f"Building website in {site_dir}")
    run(["make", "build"], cwd=site_dir, env=site_environment(settings, environ))


def deploy_site(site_dir: str, settings: AgentSettings, environ: Optional[Mapping[str, str]] = None) -> None:
    """Build then deploy; both DNS_SUFFIX and FASTLY_FQDN must be set"""
    missing = [name for name, value in (("DNS_SUFFIX", settings.dns_suffix),
                                        ("FASTLY_FQDN", settings.fastly_fqdn)) if not value]
    if missing:
        raise UsageError(f"Missing required environment: {', '.join(missing)}")

    env = site_environment(settings, environ)
    build_site(site_dir, settings, environ)
    section(f"Deploying website to the {settings.release_channel} channel")
    run(["make", "deploy"], cwd=site_dir, env=env)
