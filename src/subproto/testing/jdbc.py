"""
A convention-named handler for the "jdbc" protocol, found by discovery in the
"subproto.testing" package.
"""
from subproto.connection.factory import SubProtocolMatchingFactory
from subproto.handler.extendable import ExtendableProtocolHandler
from subproto.testing.memory import memory_connection_factory


class Handler(ExtendableProtocolHandler):

    def init_sub_protocol_factories(self, factories):
        factories.append(SubProtocolMatchingFactory(['mysql'], memory_connection_factory('mysql')))
        factories.append(SubProtocolMatchingFactory(['h2', 'mem'], memory_connection_factory('h2:mem'), priority=-1))
