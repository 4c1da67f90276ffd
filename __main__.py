"""
Habitat Website - static site on S3 behind Fastly
Site shape is selected by the site_module config value
"""
import pulumi
from config import get_config
from modules.site import create_site

# Configuration
config = get_config()

# Site: static_site or s3_website
site = create_site(config)

# Exports
pulumi.export("site_fqdn", site["site_fqdn"])
pulumi.export("bucket_name", site["bucket_name"])
pulumi.export("website_endpoint", site["website_endpoint"])
pulumi.export("cdn_target", site["cdn_target"])
pulumi.export("site_module", config.site_module)
pulumi.export("release_channel", config.release_channel)
