import importlib
import logging
import threading

from subproto.handler.conventions import HandlerError, HANDLER_CONVENTION_CLASS_NAME, PACKAGE_SEPARATOR
from subproto.handler.packages import HandlerPackages
from subproto.locator.base import Locator
from subproto.support.events import EventSource

logger = logging.getLogger(__name__)


class HandlerRegistrationError(HandlerError):
    """ A handler is already registered for the protocol. """


class UnknownSchemeError(HandlerError):
    """ No handler is registered or can be discovered for a scheme. """


class HandlerRegisteredEvent:
    """ A handler was registered. """
    def __init__(self, registry, handler):
        self.registry = registry
        self.handler = handler


class HandlerRegistry:
    """
    Maps protocol names to handlers. Handlers not registered explicitly are discovered
    from the handler packages: for the protocol "jdbc" and the package "acme.protocols", the module
    "acme.protocols.jdbc" is imported and its Handler class instantiated with no arguments.
    """

    def __init__(self, packages: HandlerPackages=None):
        self.packages = packages if packages is not None else HandlerPackages()
        self.listeners = EventSource()
        self._handlers = {}
        self._lock = threading.RLock()

    def register(self, handler):
        protocol = handler.protocol
        with self._lock:
            registered = self._handlers.get(protocol)
            if registered is not None:
                raise HandlerRegistrationError("a handler is already registered for %s: %r" % (protocol, registered))
            self._handlers[protocol] = handler
        logger.info("registered %r" % handler)
        self.listeners.fire(HandlerRegisteredEvent(self, handler))

    def unregister(self, protocol):
        with self._lock:
            return self._handlers.pop(protocol, None)

    def registered(self, protocol):
        return self._handlers.get(protocol)

    def lookup(self, protocol):
        """
        Retrieves the handler for a protocol, discovering it if it is not registered.
        :raises UnknownSchemeError: when there is no handler
        """
        handler = self._handlers.get(protocol)
        if handler is None:
            with self._lock:
                handler = self._handlers.get(protocol) or self._discover(protocol)
        if handler is None:
            raise UnknownSchemeError("unknown protocol: %s" % protocol)
        return handler

    def _discover(self, protocol):
        for package in self.packages:
            module_name = package + PACKAGE_SEPARATOR + protocol
            try:
                module = importlib.import_module(module_name)
            except ModuleNotFoundError as e:
                if e.name is None or not _is_prefix(e.name, module_name):
                    raise
                logger.debug("no handler module %s" % module_name)
                continue
            handler_class = getattr(module, HANDLER_CONVENTION_CLASS_NAME, None)
            if handler_class is None:
                logger.debug("no %s class in %s" % (HANDLER_CONVENTION_CLASS_NAME, module_name))
                continue
            handler = handler_class()
            if handler.protocol != protocol:
                logger.warning("%s.%s handles %s, not %s" % (module_name, HANDLER_CONVENTION_CLASS_NAME,
                                                            handler.protocol, protocol))
                continue
            handler.init(self)
            logger.info("discovered %r in %s" % (handler, module_name))
            return handler
        return None

    def parse(self, spec):
        return Locator.parse(spec, self)


def _is_prefix(name, module_name):
    """
    >>> _is_prefix('acme', 'acme.protocols.jdbc')
    True
    >>> _is_prefix('acme.proto', 'acme.protocols.jdbc')
    False
    """
    return module_name == name or module_name.startswith(name + PACKAGE_SEPARATOR)


default_registry = HandlerRegistry(HandlerPackages.from_environ())


def parse_locator(spec):
    """ Parses a locator string with the default registry. """
    return default_registry.parse(spec)
