"""
Unit tests for the cargo test, macOS release and website pipelines
"""

import os
import shutil
import sys
import tempfile
import unittest
from unittest.mock import patch

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ci.cargo_test import cargo_test_command, component_dir, run_cargo_test
from ci.mac_release import PLAN_BUILD_SCRIPT, PLAN_CONTEXT, build_mac_release, read_build_manifest
from ci.runner import UsageError
from ci.settings import get_settings
from ci.site import build_site, deploy_site, site_environment


def passthrough_bootstrapper(settings, env, workdir="."):
    return dict(env)


def passthrough_install(settings, env):
    return dict(env)


class TestCargoTest(unittest.TestCase):

    def setUp(self):
        self.root = tempfile.mkdtemp()
        os.makedirs(os.path.join(self.root, "components", "butterfly"))

    def tearDown(self):
        shutil.rmtree(self.root, ignore_errors=True)

    def test_command_without_options(self):
        self.assertEqual(cargo_test_command(), ["cargo", "test", "--", "--nocapture"])

    def test_command_with_features_and_options(self):
        self.assertEqual(
            cargo_test_command("functional", "--test-threads=1 --ignored"),
            ["cargo", "test", "--features", "functional", "--", "--nocapture", "--test-threads=1", "--ignored"]
        )

    def test_component_dir(self):
        self.assertEqual(component_dir(self.root, "butterfly"),
                         os.path.join(self.root, "components", "butterfly"))

    def test_unknown_component(self):
        with self.assertRaises(UsageError):
            component_dir(self.root, "sup")
        with self.assertRaises(UsageError):
            component_dir(self.root, "")

    def test_run_cargo_test(self):
        settings = get_settings({})
        with patch('ci.cargo_test.install_mac_bootstrapper', side_effect=passthrough_bootstrapper), \
                patch('ci.cargo_test.install_rust', side_effect=passthrough_install), \
                patch('ci.cargo_test.make_testing_fs_root', return_value="/tmp/testing-fs-root-abc123"), \
                patch('ci.cargo_test.section'), \
                patch('ci.cargo_test.run') as mock_run:
            run_cargo_test("butterfly", settings, features="functional", root=self.root,
                           environ={"PATH": "/usr/bin"})

            args, kwargs = mock_run.call_args
            self.assertEqual(args[0], ["cargo", "test", "--features", "functional", "--", "--nocapture"])
            self.assertEqual(kwargs["cwd"], os.path.join(self.root, "components", "butterfly"))
            env = kwargs["env"]
            self.assertEqual(env["TESTING_FS_ROOT"], "/tmp/testing-fs-root-abc123")
            self.assertEqual(env["SSL_CERT_FILE"], "/usr/local/etc/openssl/cert.pem")
            self.assertEqual(env["SODIUM_STATIC"], "true")
            self.assertEqual(env["LD_LIBRARY_PATH"], "/opt/mac-bootstrapper/embedded/lib")

    def test_osx_setup_environment_reaches_tests(self):
        settings = get_settings({"SSL_CERT_FILE": "/hab/pkgs/core/cacerts/cert.pem"})
        with patch('ci.toolchain.run') as mock_install, \
                patch('ci.toolchain.section'), \
                patch('ci.cargo_test.install_mac_bootstrapper', side_effect=passthrough_bootstrapper), \
                patch('ci.cargo_test.install_rust', side_effect=passthrough_install), \
                patch('ci.cargo_test.make_testing_fs_root', return_value="/tmp/testing-fs-root-abc123"), \
                patch('ci.cargo_test.section'), \
                patch('ci.cargo_test.run') as mock_run:
            run_cargo_test("butterfly", settings, root=self.root, environ={"PATH": "/usr/bin"}, osx_setup=True)

            self.assertEqual([c.args[0] for c in mock_install.call_args_list], [
                ["sudo", "hab", "pkg", "install", "core/rust"],
                ["sudo", "hab", "pkg", "install", "core/cacerts"],
            ])
            self.assertEqual(mock_run.call_args.kwargs["env"]["SSL_CERT_FILE"], "/hab/pkgs/core/cacerts/cert.pem")

    def test_unknown_component_does_not_bootstrap(self):
        with patch('ci.cargo_test.install_mac_bootstrapper') as mock_bootstrap, \
                patch('ci.cargo_test.run') as mock_run:
            with self.assertRaises(UsageError):
                run_cargo_test("sup", get_settings({}), root=self.root)
            mock_bootstrap.assert_not_called()
            mock_run.assert_not_called()


class TestMacRelease(unittest.TestCase):

    def setUp(self):
        self.root = tempfile.mkdtemp()
        os.makedirs(os.path.join(self.root, ".buildkite"))
        with open(os.path.join(self.root, ".buildkite", "env"), "w") as f:
            f.write("HAB_BLDR_CHANNEL=unstable\n")

    def tearDown(self):
        shutil.rmtree(self.root, ignore_errors=True)

    def write_manifest(self):
        os.makedirs(os.path.join(self.root, "results"))
        with open(os.path.join(self.root, "results", "last_build.env"), "w") as f:
            f.write("pkg_ident=core/hab/1.6.0/20200101\npkg_target=x86_64-darwin\npkg_artifact=core-hab.hart\n")

    def test_build_mac_release(self):
        self.write_manifest()
        settings = get_settings({"HAB_ORIGIN": "core"})

        with patch('ci.mac_release.install_mac_bootstrapper', side_effect=passthrough_bootstrapper), \
                patch('ci.mac_release.install_rust', side_effect=passthrough_install), \
                patch('ci.mac_release.install_hab', side_effect=passthrough_install), \
                patch('ci.mac_release.brew_install') as mock_brew, \
                patch('ci.mac_release.generate_origin_key') as mock_keygen, \
                patch('ci.mac_release.install_keys_system_wide') as mock_keys, \
                patch('ci.mac_release.section'), \
                patch('ci.mac_release.run') as mock_run:
            manifest = build_mac_release(settings, root=self.root, environ={"PATH": "/usr/bin"})

            self.assertEqual(mock_brew.call_args.args[0], ["wget"])
            self.assertEqual(mock_keygen.call_args.args[0], "core")
            self.assertEqual(mock_keys.call_args.args[1], "/hab/cache/keys")

            args, kwargs = mock_run.call_args
            self.assertEqual(args[0], ["sudo", "-E", "bash", PLAN_BUILD_SCRIPT, PLAN_CONTEXT])
            self.assertEqual(kwargs["cwd"], self.root)
            self.assertEqual(kwargs["env"]["HAB_BLDR_CHANNEL"], "unstable")
            self.assertEqual(kwargs["env"]["SSL_CERT_FILE"], "/usr/local/etc/openssl/cert.pem")

            self.assertEqual(manifest["pkg_ident"], "core/hab/1.6.0/20200101")
            self.assertEqual(manifest["pkg_target"], "x86_64-darwin")

    def test_missing_manifest(self):
        self.assertEqual(read_build_manifest(self.root), {})


class TestSite(unittest.TestCase):

    def test_site_environment(self):
        settings = get_settings({"RELEASE_CHANNEL": "current", "DNS_SUFFIX": "habitat.sh"})
        env = site_environment(settings, {"PATH": "/usr/bin"})

        self.assertEqual(env["RELEASE_CHANNEL"], "current")
        self.assertEqual(env["DNS_SUFFIX"], "habitat.sh")
        self.assertNotIn("FASTLY_FQDN", env)
        self.assertEqual(env["PATH"], "/usr/bin")

    def test_build_site(self):
        with patch('ci.site.run') as mock_run, patch('ci.site.section'):
            build_site("www", get_settings({}), {})

            args, kwargs = mock_run.call_args
            self.assertEqual(args[0], ["make", "build"])
            self.assertEqual(kwargs["cwd"], "www")
            self.assertEqual(kwargs["env"]["RELEASE_CHANNEL"], "stable")

    def test_deploy_site(self):
        settings = get_settings({"DNS_SUFFIX": "habitat.sh", "FASTLY_FQDN": "habitat.map.fastly.net"})
        with patch('ci.site.run') as mock_run, patch('ci.site.section'):
            deploy_site("www", settings, {})

            self.assertEqual([c.args[0] for c in mock_run.call_args_list],
                             [["make", "build"], ["make", "deploy"]])
            self.assertEqual(mock_run.call_args.kwargs["env"]["FASTLY_FQDN"], "habitat.map.fastly.net")

    def test_deploy_requires_dns_configuration(self):
        with patch('ci.site.run') as mock_run:
            with self.assertRaises(UsageError) as ctx:
                deploy_site("www", get_settings({"DNS_SUFFIX": "habitat.sh"}), {})

            self.assertIn("FASTLY_FQDN", str(ctx.exception))
            mock_run.assert_not_called()


if __name__ == "__main__":
    unittest.main()
