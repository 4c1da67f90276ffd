"""
S3 Website Module
Bare S3 website with deploy steps run as local provisioners
"""

from .functions import create_s3_website_resources, run_deploy_steps
