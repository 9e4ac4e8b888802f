import sys
from abc import abstractmethod

# lower values take precedence
MAX_PRIORITY = -sys.maxsize - 1
NORMAL_PRIORITY = 0
MIN_PRIORITY = sys.maxsize


class Prioritized:
    """ An object ranked by priority. A lower value runs first. """

    @property
    def priority(self) -> int:
        return NORMAL_PRIORITY


def priority_key(prioritized):
    return prioritized.priority


class SubProtocolConnectionFactory(Prioritized):
    """
    Opens connections for the locators of an extendable protocol handler.
    """

    @abstractmethod
    def supports(self, locator, sub_protocols) -> bool:
        """
        Determines if this factory applies to the locator. This must not have side effects.
        :param locator: the parsed Locator
        :param sub_protocols: the sub-protocol chain of the locator, possibly empty
        """
        raise NotImplementedError

    @abstractmethod
    def create(self, locator, sub_protocols, proxy):
        """
        Creates a connection for a supported locator.
        :param locator: the parsed Locator
        :param sub_protocols: the sub-protocol chain of the locator
        :param proxy: the Proxy to connect through
        :return: the LocatorConnection, or None to decline the locator so that the next factory is tried.
        """
        raise NotImplementedError


class SubProtocolMatchingFactory(SubProtocolConnectionFactory):
    """
    Supports the locators whose sub-protocol chain begins with the given sub-protocols.
    """

    def __init__(self, sub_protocols, connection_factory, priority=NORMAL_PRIORITY):
        """
        :param sub_protocols: the chain prefix to match, e.g. ['mysql']
        :param connection_factory: a callable taking (locator, proxy) that returns a connection or None
        :param priority: the priority of this factory
        """
        self.sub_protocols = list(sub_protocols)
        self._connection_factory = connection_factory
        self._priority = priority

    @property
    def priority(self):
        return self._priority

    def supports(self, locator, sub_protocols):
        size = len(self.sub_protocols)
        return size > 0 and list(sub_protocols[:size]) == self.sub_protocols

    def create(self, locator, sub_protocols, proxy):
        return self._connection_factory(locator, proxy)

    def __repr__(self):
        return "%s(%s, priority=%s)" % (type(self).__name__, ':'.join(self.sub_protocols), self._priority)
