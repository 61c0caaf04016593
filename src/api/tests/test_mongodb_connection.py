"""Tests for the cached MongoClient in adapter.mongodb.connection."""

import unittest
from unittest.mock import patch, MagicMock

from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from adapter.mongodb import connection


def _dead_client():
    client = MagicMock()
    client.admin.command.side_effect = ConnectionFailure('connection reset')
    return client


class TestGetMongodbClient(unittest.TestCase):

    def setUp(self):
        connection.reset_client()

    def tearDown(self):
        connection.reset_client()

    @patch('adapter.mongodb.connection._connect')
    def test_connects_once_and_reuses_healthy_client(self, mock_connect):
        client = MagicMock()
        mock_connect.return_value = client

        self.assertIs(connection.get_mongodb_client(), client)
        self.assertIs(connection.get_mongodb_client(), client)

        mock_connect.assert_called_once()

    @patch('adapter.mongodb.connection._connect')
    def test_stale_client_is_closed_before_reconnecting(self, mock_connect):
        stale = _dead_client()
        fresh = MagicMock()
        mock_connect.side_effect = [stale, fresh]

        connection.get_mongodb_client()
        result = connection.get_mongodb_client()

        self.assertIs(result, fresh)
        stale.close.assert_called_once()

    @patch('adapter.mongodb.connection._connect')
    def test_initial_failure_is_not_retried(self, mock_connect):
        mock_connect.side_effect = ServerSelectionTimeoutError('no servers')

        self.assertIsNone(connection.get_mongodb_client())
        self.assertIsNone(connection.get_mongodb_client())

        mock_connect.assert_called_once()

    @patch('adapter.mongodb.connection._connect')
    def test_reconnect_failure_is_retried_later(self, mock_connect):
        fresh = MagicMock()
        mock_connect.side_effect = [_dead_client(), ServerSelectionTimeoutError('no servers'), fresh]

        connection.get_mongodb_client()
        self.assertIsNone(connection.get_mongodb_client())
        self.assertIs(connection.get_mongodb_client(), fresh)

    @patch('adapter.mongodb.connection._connect')
    def test_reset_closes_cached_client(self, mock_connect):
        client = MagicMock()
        mock_connect.return_value = client
        connection.get_mongodb_client()

        connection.reset_client()

        client.close.assert_called_once()


if __name__ == '__main__':
    unittest.main()
