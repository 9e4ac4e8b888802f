import logging
import os

from subproto.config.config import load_config, fetch_conf_path

logger = logging.getLogger(__name__)

HANDLER_PACKAGES_SEPARATOR = '|'

HANDLER_PACKAGES_ENVIRONMENT_VARIABLE = 'SUBPROTO_HANDLER_PACKAGES'

HANDLER_PACKAGES_SECTION = 'handlers'


class HandlerPackages:
    """
    The packages searched for handlers, in search order. Packages are only ever appended,
    and a package appears once.
    """

    def __init__(self, packages=()):
        self._packages = []
        for package in packages:
            self.append(package)

    @classmethod
    def from_value(cls, value):
        """
        Builds the packages from a '|' separated list.

        >>> list(HandlerPackages.from_value('acme.protocols| other.protocols ||'))
        ['acme.protocols', 'other.protocols']
        """
        return cls(value.split(HANDLER_PACKAGES_SEPARATOR) if value else ())

    @classmethod
    def from_environ(cls, environ=os.environ):
        return cls.from_value(environ.get(HANDLER_PACKAGES_ENVIRONMENT_VARIABLE))

    @classmethod
    def load(cls, name, directory, user_directory='~'):
        """
        Reads the packages listed in the [handlers] section of a configuration.
        :param name: the base name of the configuration files
        :param directory: the location of the configuration files
        """
        conf = load_config(name, directory, user_directory)
        section = fetch_conf_path(conf, [HANDLER_PACKAGES_SECTION])
        packages = section.get('packages', ()) if section else ()
        if isinstance(packages, str):
            packages = [packages]
        return cls(packages)

    def append(self, package) -> bool:
        """
        Adds a package to the end of the search order.
        :return: True if the package was added, False if it was blank or already present.
        """
        package = package.strip() if package else package
        if not package or package in self._packages:
            return False
        self._packages.append(package)
        logger.info("added handler package %s" % package)
        return True

    @property
    def value(self):
        return HANDLER_PACKAGES_SEPARATOR.join(self._packages)

    def __iter__(self):
        return iter(tuple(self._packages))

    def __contains__(self, package):
        return package in self._packages

    def __len__(self):
        return len(self._packages)

    def __repr__(self):
        return "HandlerPackages(%r)" % self.value
