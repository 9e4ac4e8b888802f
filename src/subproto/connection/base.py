import logging
from abc import abstractmethod
from enum import Enum

from subproto.support.events import EventSource
from subproto.support.mixins import CommonEqualityMixin

logger = logging.getLogger(__name__)


class LocatorConnectionError(Exception):
    """ Indicates an error condition with a connection. """


class ConnectionNotAvailableError(LocatorConnectionError):
    """ Indicates no connection could be opened for a locator. """


class ConnectionNotConnectedError(LocatorConnectionError):
    """ Indicates a connection is in the disconnected state when a connection is required. """


class ProxyType(Enum):
    DIRECT = 'direct'
    HTTP = 'http'
    SOCKS = 'socks'


class Proxy(CommonEqualityMixin):
    """
    The proxy through which a connection is made.
    A direct connection has no address; the other proxy types require one.
    """
    def __init__(self, type=ProxyType.DIRECT, address=None):
        if (type is ProxyType.DIRECT) != (address is None):
            raise ValueError("a %s proxy %s an address" %
                             (type.value, "cannot have" if address is not None else "requires"))
        self.type = type
        self.address = address

    def __repr__(self):
        return "Proxy(%s)" % self.type.value if self.address is None \
            else "Proxy(%s @ %s)" % (self.type.value, self.address)


NO_PROXY = Proxy()


class ConnectionEvent:
    """ base class for connection events. """
    def __init__(self, connection):
        self.connection = connection


class ConnectionOpenedEvent(ConnectionEvent):
    """ The connection was opened. """


class ConnectionClosedEvent(ConnectionEvent):
    """ The connection was closed. """


class LocatorConnection:
    """
    A connection to the resource a locator refers to.
    The connection is created unconnected. Subclasses implement the transport in the
    _connect() and _close() template methods.
    """

    def __init__(self, locator, proxy=NO_PROXY):
        self.locator = locator
        self.proxy = proxy
        self.events = EventSource()
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    def connect(self):
        """
        Connects to the resource. If the connection is already connected,
        this method returns silently.
        """
        if self._connected:
            return
        self._connect()
        self._connected = True
        logger.debug("connected to %s" % self.locator)
        self.events.fire(ConnectionOpenedEvent(self))

    def close(self):
        if not self._connected:
            return
        self._connected = False
        self._close()
        logger.debug("closed connection to %s" % self.locator)
        self.events.fire(ConnectionClosedEvent(self))

    def check_connected(self):
        if not self._connected:
            raise ConnectionNotConnectedError("not connected to %s" % self.locator)

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @abstractmethod
    def _connect(self):
        """ Template method for subclasses to perform the connection.
            If connection is not possible, an exception should be thrown
        """
        raise NotImplementedError

    @abstractmethod
    def _close(self):
        """ Template method for subclasses to release the transport. """
        raise NotImplementedError
