"""
Static Site Module
Generic static-site unit: build command, S3 hosting, CDN DNS record
"""

from .functions import create_static_site_resources, run_build
