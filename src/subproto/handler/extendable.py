import logging

from subproto.connection.base import NO_PROXY
from subproto.connection.factory import priority_key
from subproto.handler.conventions import HandlerError, assert_conventions, resolve_convention_protocol, \
    resolve_handler_package
from subproto.locator import urls
from subproto.locator.base import LocatorHandler

logger = logging.getLogger(__name__)


class HandlerStateError(HandlerError):
    """ The handler was used out of order, such as configured after init(). """


class ExtendableProtocolHandler(LocatorHandler):
    """
    A handler for protocols with sub-protocols, like "{protocol}:{sub-protocol}:...:{sub-protocol}://...".

    The sub-protocols are moved into the "_sp" matrix parameter of the path when the locator is
    parsed, so "jdbc:mysql://localhost:3307/mydb" becomes "jdbc://localhost:3307/mydb;_sp=mysql"
    and is handled by the "jdbc" handler. Connections are opened by the first
    SubProtocolConnectionFactory, in priority order, that supports the locator and creates a
    connection. When none does, open_fallback_connection() is used.

    Building is done in two phases: factories are added through configure() or by overriding
    init_sub_protocol_factories(), and then init() sorts them and registers the handler.

    When no protocol is given, the class must follow the conventions in
    subproto.handler.conventions and the protocol is taken from the module name.
    """

    def __init__(self, protocol=None, handler_packages=None):
        """
        :param protocol: the outer scheme handled, or None to derive it from the module name
        :param handler_packages: the HandlerPackages that receives the package of a
            convention-named handler
        """
        self.handler_package = None
        if protocol is None:
            cls = type(self)
            assert_conventions(cls)
            protocol = resolve_convention_protocol(cls.__module__)
            self.handler_package = resolve_handler_package(cls.__module__)
            if handler_packages is not None:
                handler_packages.append(self.handler_package)
        super().__init__(protocol)
        self._pending = []
        self._factories = None

    def configure(self, *factories):
        """ Adds sub-protocol connection factories. Must be called before init(). """
        if self._factories is not None:
            raise HandlerStateError("handler for %s is already initialized" % self.protocol)
        self._pending.extend(factories)
        return self

    def init(self, registry):
        """
        Sorts the factories by priority and registers this handler.
        The factories cannot be changed afterwards.
        """
        factories = list(self._pending)
        self.init_sub_protocol_factories(factories)
        self._factories = tuple(sorted(factories, key=priority_key))
        logger.info("initialized %r with factories %s" % (self, self._factories))
        super().init(registry)

    def init_sub_protocol_factories(self, factories):
        """
        Template method for subclasses to add their factories.
        :param factories: the mutable list of SubProtocolConnectionFactory instances
        """

    @property
    def factories(self):
        return self._factories if self._factories is not None else tuple(self._pending)

    def open_connection(self, locator, proxy=NO_PROXY):
        sub_protocols = self.resolve_sub_protocols(locator)
        for factory in self.factories:
            if factory.supports(locator, sub_protocols):
                connection = factory.create(locator, sub_protocols, proxy)
                if connection is not None:
                    logger.debug("%s opened connection for %s" % (factory, locator))
                    return connection
                logger.debug("%s declined %s" % (factory, locator))
        return self.open_fallback_connection(locator, proxy)

    def open_fallback_connection(self, locator, proxy):
        """
        Template method for subclasses to open a connection when no factory has created one.
        :param locator: the locator to connect to
        :param proxy: the Proxy through which the connection is made
        :return: None by default
        """
        logger.debug("no sub-protocol connection for %s" % locator)
        return None

    def parse_url(self, locator, spec, start, limit):
        end = spec.find(urls.SCHEME_SEPARATOR, start)
        actual = urls.rewrite_spec(locator.scheme, spec, start, end, limit) if end > start else spec
        if actual != spec:
            super().parse_url(locator, actual, start, len(actual))
        else:
            super().parse_url(locator, spec, start, limit)

    def equals(self, a, b):
        return self.to_external_form(a) == self.to_external_form(b)

    def hash(self, locator):
        return hash(self.to_external_form(locator))

    def hosts_equal(self, a, b):
        return a.host == b.host

    def to_external_form(self, locator):
        return urls.to_external_form(locator)

    def resolve_sub_protocols(self, locator):
        return urls.resolve_sub_protocols(locator)

    def resolve_authority(self, locator):
        return urls.resolve_authority(locator)

    def resolve_path(self, locator):
        return urls.resolve_path(locator.path)
