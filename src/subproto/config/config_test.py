import os
import tempfile
import unittest

from configobj import ConfigObjError, ConfigObj
from hamcrest import assert_that, is_, equal_to, calling, raises

from subproto.config.config import config_filename, config_flavor, load_config_file_base, \
    load_config, map_os_name, fetch_conf_path

config_name = 'config_test'
config_dir = os.path.dirname(__file__)


class ConfigTestCase(unittest.TestCase):

    def setUp(self):
        self.home = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.home.cleanup()

    def test_config_file_not_found(self):
        assert_that(calling(load_config_file_base).with_args('blah'), raises(IOError))

    def test_missing_optional_file_is_empty(self):
        assert_that(load_config_file_base('blah', must_exist=False), is_(equal_to({})))

    def test_config_file_invalid_schema(self):
        assert_that(calling(load_config).with_args('config_test_invalid_schema', config_dir, self.home.name),
                    raises(ConfigObjError, "the config file config_test_invalid_schema failed validation"))

    def test_config_file_invalid_syntax(self):
        assert_that(calling(load_config_file_base).with_args(os.path.join(config_dir, 'config_test_invalid_syntax.cfg')),
                    raises(ConfigObjError, "Section too nested at line 1. at .*config_test_invalid_syntax.cfg"))

    def test_can_retrieve_config_file(self):
        file = config_filename(config_flavor(config_name, "default"), config_dir)
        assert_that(os.path.exists(file), is_(True), "expected config path %s to exist" % file)

    def test_local_config_overrides_default(self):
        conf = load_config(config_name, config_dir, self.home.name)
        assert_that(conf['handlers']['packages'], is_(['acme.protocols', 'acme.extra']))
        assert_that(conf['handlers']['retries'], is_(2))

    def test_user_config_overrides_default(self):
        with open(os.path.join(self.home.name, config_name + '.cfg'), 'w') as f:
            f.write("[handlers]\nretries = 7\n")
        conf = load_config(config_name, config_dir, self.home.name)
        assert_that(conf['handlers']['retries'], is_(7))

    def test_map_os_name(self):
        assert_that(map_os_name('Windows'), is_('windows'))
        assert_that(map_os_name('Darwin'), is_('osx'))
        assert_that(map_os_name('darwin'), is_('osx'))
        assert_that(map_os_name('Linux'), is_('linux'))

    def test_non_existent_config_path(self):
        sut = ConfigObj()
        assert_that(fetch_conf_path(sut, ['handlers']), is_(None))

    def test_fetch_nested_config_path(self):
        sut = ConfigObj()
        sut['a'] = {'b': {'c': '1'}}
        assert_that(fetch_conf_path(sut, ['a', 'b'])['c'], is_('1'))


if __name__ == '__main__':  # pragma no cover
    unittest.main()
