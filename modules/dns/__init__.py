"""
DNS Module
Route53 CNAME pointing the site at the Fastly CDN
"""

from .functions import create_cdn_record, lookup_zone_id
