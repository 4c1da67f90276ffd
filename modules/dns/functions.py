"""
DNS Module Functions
Points the site name at the Fastly CDN hostname
"""

import pulumi_aws as aws
from typing import Dict


def lookup_zone_id(dns_suffix: str) -> str:
    """Resolve the public hosted zone for a DNS suffix"""
    zone = aws.route53.get_zone(name=dns_suffix, private_zone=False)
    return zone.zone_id


def create_cdn_record(name: str, fqdn: str, fastly_fqdn: str, zone_id: str, ttl: int = 300) -> Dict[str, any]:
    """
    Create CNAME from the site FQDN to the Fastly service hostname

    Args:
        name: Resource name prefix
        fqdn: Site hostname
        fastly_fqdn: Fastly hostname serving the site
        zone_id: Route53 hosted zone ID
        ttl: Record TTL in seconds

    Returns:
        Dict with record resource and outputs
    """
    if not fastly_fqdn:
        raise ValueError("fastly_fqdn is required to point the site at the CDN")

    record = aws.route53.Record(
        f"{name}-cdn-cname",
        zone_id=zone_id,
        name=fqdn,
        type="CNAME",
        ttl=ttl,
        records=[fastly_fqdn]
    )

    return {
        "record": record,
        "fqdn": fqdn,
        "target": fastly_fqdn
    }
