"""
hab-ci: build agent entry points for the Buildkite pipeline
"""

import logging
import sys
from typing import Optional

import click

from .cargo_test import run_cargo_test
from .mac_release import build_mac_release
from .runner import CiError, section
from .settings import get_settings
from .site import build_site, deploy_site

logger = logging.getLogger(__name__)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """Habitat build agent tooling"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command("cargo-test")
@click.option("-f", "--features", default=None, help="Cargo features to enable")
@click.option("-t", "--test-options", default=None, help="Arguments passed to the test binary")
@click.option("--osx-setup", is_flag=True, help="Install core/rust and core/cacerts before testing")
@click.option("--root", default=".", type=click.Path(file_okay=False), help="Repository root")
@click.argument("component")
def cargo_test_command(features: Optional[str], test_options: Optional[str], osx_setup: bool,
                       root: str, component: str):
    """Bootstrap the toolchain and run cargo test for COMPONENT"""
    run_cargo_test(component, get_settings(), features=features, test_options=test_options,
                   root=root, osx_setup=osx_setup)


@cli.command("build-mac-release")
@click.option("--root", default=".", type=click.Path(file_okay=False), help="Repository root")
def build_mac_release_command(root: str):
    """Build the macOS release of hab"""
    manifest = build_mac_release(get_settings(), root=root)
    if manifest.get("pkg_ident"):
        section(f"Release manifest: {manifest['pkg_ident']} ({manifest.get('pkg_target', 'unknown')})")


@cli.group()
def site():
    """Website build and deploy"""


@site.command("build")
@click.option("--site-dir", default="www", type=click.Path(file_okay=False), help="Website directory")
def site_build_command(site_dir: str):
    """Run make build for the website"""
    build_site(site_dir, get_settings())


@site.command("deploy")
@click.option("--site-dir", default="www", type=click.Path(file_okay=False), help="Website directory")
def site_deploy_command(site_dir: str):
    """Run make build and make deploy for the website"""
    deploy_site(site_dir, get_settings())


def main(argv=None) -> int:
    """Console entry point; malformed arguments exit 1, failing commands exit with their code"""
    try:
        return cli.main(args=argv, prog_name="hab-ci", standalone_mode=False) or 0
    except click.ClickException as e:
        e.show()
        sys.exit(1)
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)
    except CiError as e:
        logger.error(str(e))
        sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
