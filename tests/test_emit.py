import json
import unittest
from brewprobe import emit
from brewprobe.prober import ProbeConfig


class TestEmit(unittest.TestCase):

    def setUp(self):
        self.probe_config = ProbeConfig(
            homebrew_prefix="/opt/homebrew",
            search_paths=["/opt/homebrew", "/opt/homebrew/opt/qt@5"],
            python_executable="/opt/homebrew/bin/python3.12",
            deployment_target="15.0",
            preloaded_packages=["libaec"],
        )

    def test_cmake_args(self):
        self.assertEqual(emit.cmake_args(self.probe_config), [
            "-DCMAKE_PREFIX_PATH=/opt/homebrew;/opt/homebrew/opt/qt@5",
            "-DHOMEBREW_PREFIX=/opt/homebrew",
            "-DPython3_EXECUTABLE=/opt/homebrew/bin/python3.12",
            "-DCMAKE_OSX_DEPLOYMENT_TARGET=15.0",
        ])

    def test_cmake_args_skip_unset_values(self):
        self.assertEqual(emit.cmake_args(ProbeConfig(homebrew_prefix="")), [])

    def test_to_cmake(self):
        script = emit.to_cmake(self.probe_config)
        self.assertIn('if(NOT "/opt/homebrew/opt/qt@5" IN_LIST CMAKE_PREFIX_PATH)', script)
        self.assertIn('set(Python3_EXECUTABLE "/opt/homebrew/bin/python3.12" CACHE FILEPATH', script)
        self.assertIn('set(HOMEBREW_PREFIX "/opt/homebrew" CACHE PATH', script)
        self.assertTrue(script.rstrip().endswith("find_package(libaec CONFIG QUIET)"))

    def test_to_cmake_escapes_quotes(self):
        script = emit.to_cmake(ProbeConfig(search_paths=['/odd "dir"/$x']))
        self.assertIn('"/odd \\"dir\\"/\\$x"', script)

    def test_to_env(self):
        self.assertEqual(emit.to_env(self.probe_config), (
            "export CMAKE_PREFIX_PATH=/opt/homebrew:/opt/homebrew/opt/qt@5\n"
            "export HOMEBREW_PREFIX=/opt/homebrew\n"
            "export Python3_EXECUTABLE=/opt/homebrew/bin/python3.12\n"
            "export MACOSX_DEPLOYMENT_TARGET=15.0\n"
        ))

    def test_to_env_forwarding_note(self):
        self.assertIn("-DPython3_EXECUTABLE", emit.to_env.__doc__)

    def test_to_json(self):
        self.assertEqual(json.loads(emit.to_json(self.probe_config)), self.probe_config.to_dict())

    def test_to_text_not_found(self):
        text = emit.to_text(ProbeConfig(homebrew_prefix=""))
        self.assertIn("Homebrew prefix:   not found", text)
        self.assertIn("(none)", text)

    def test_render_unknown_format(self):
        with self.assertRaises(ValueError):
            emit.render(self.probe_config, "yaml")


def test_render_dispatches_every_format():
    probe_config = ProbeConfig(homebrew_prefix="/usr/local", search_paths=["/usr/local"])
    for output_format in emit.FORMATS:
        assert emit.render(probe_config, output_format) == emit.RENDERERS[output_format](probe_config)
    assert "/usr/local" in emit.render(probe_config)

if __name__ == "__main__":
    unittest.main()
