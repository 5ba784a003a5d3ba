"""Tests for DynamoDB single-table client."""

from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from trip_planner.data.dynamodb import DynamoDBClient


@pytest.fixture
def mock_boto3():
    with patch("trip_planner.data.dynamodb.boto3") as mock:
        mock_table = MagicMock()
        mock_resource = MagicMock()
        mock_resource.Table.return_value = mock_table
        mock.resource.return_value = mock_resource
        yield mock, mock_table


def test_client_init_local(mock_boto3):
    mock, mock_table = mock_boto3
    client = DynamoDBClient(
        table_name="test-table",
        endpoint_url="http://localhost:8000",
        region="ap-northeast-1",
    )
    assert client.table_name == "test-table"
    mock.resource.assert_called_once_with(
        "dynamodb", region_name="ap-northeast-1", endpoint_url="http://localhost:8000"
    )


def test_client_init_aws(mock_boto3):
    mock, mock_table = mock_boto3
    DynamoDBClient(table_name="test-table", region="us-east-1")
    mock.resource.assert_called_once_with("dynamodb", region_name="us-east-1")


def test_put_item(mock_boto3):
    mock, mock_table = mock_boto3
    client = DynamoDBClient(table_name="test-table")
    client.put_item({"PK": "TRIP#1", "SK": "METADATA", "Data": {"destination": "Kyoto"}})
    mock_table.put_item.assert_called_once_with(
        Item={"PK": "TRIP#1", "SK": "METADATA", "Data": {"destination": "Kyoto"}}
    )


def test_get_item(mock_boto3):
    mock, mock_table = mock_boto3
    mock_table.get_item.return_value = {
        "Item": {"PK": "USER#123", "SK": "PROFILE", "Data": {"email": "a@b.co"}}
    }
    client = DynamoDBClient(table_name="test-table")
    item = client.get_item("USER#123", "PROFILE")
    assert item["PK"] == "USER#123"
    mock_table.get_item.assert_called_once_with(Key={"PK": "USER#123", "SK": "PROFILE"})


def test_get_item_not_found(mock_boto3):
    mock, mock_table = mock_boto3
    mock_table.get_item.return_value = {}
    client = DynamoDBClient(table_name="test-table")
    assert client.get_item("USER#999", "PROFILE") is None


def test_query(mock_boto3):
    mock, mock_table = mock_boto3
    mock_table.query.return_value = {
        "Items": [
            {"PK": "USER#123", "SK": "CREDENTIAL"},
            {"PK": "USER#123", "SK": "PROFILE"},
        ]
    }
    client = DynamoDBClient(table_name="test-table")
    items = client.query(pk="USER#123")
    assert len(items) == 2
    call_kwargs = mock_table.query.call_args[1]
    assert call_kwargs["ScanIndexForward"] is True
    assert "IndexName" not in call_kwargs
    assert "Limit" not in call_kwargs


def test_query_with_sk_prefix(mock_boto3):
    mock, mock_table = mock_boto3
    mock_table.query.return_value = {"Items": []}
    client = DynamoDBClient(table_name="test-table")
    items = client.query(pk="USER#123", sk_prefix="PRO")
    assert items == []
    call_kwargs = mock_table.query.call_args[1]
    assert "KeyConditionExpression" in call_kwargs


def test_query_gsi1_newest_first(mock_boto3):
    mock, mock_table = mock_boto3
    mock_table.query.return_value = {"Items": [{"GSI1PK": "USER#1#TRIP"}]}
    client = DynamoDBClient(table_name="test-table")
    items = client.query_gsi1("USER#1#TRIP", limit=5, scan_forward=False)
    assert len(items) == 1
    call_kwargs = mock_table.query.call_args[1]
    assert call_kwargs["IndexName"] == "GSI1"
    assert call_kwargs["Limit"] == 5
    assert call_kwargs["ScanIndexForward"] is False


def test_delete_item(mock_boto3):
    mock, mock_table = mock_boto3
    client = DynamoDBClient(table_name="test-table")
    client.delete_item("TRIP#1", "METADATA")
    mock_table.delete_item.assert_called_once_with(
        Key={"PK": "TRIP#1", "SK": "METADATA"}
    )


def test_create_table_when_missing(mock_boto3):
    mock, mock_table = mock_boto3
    mock_table.load.side_effect = ClientError(
        {"Error": {"Code": "ResourceNotFoundException", "Message": "missing"}},
        "DescribeTable",
    )
    client = DynamoDBClient(table_name="test-table")
    client.create_table_if_not_exists()

    create = mock_table.meta.client.create_table
    create.assert_called_once()
    kwargs = create.call_args[1]
    assert kwargs["TableName"] == "test-table"
    assert kwargs["GlobalSecondaryIndexes"][0]["IndexName"] == "GSI1"


def test_create_table_already_exists(mock_boto3):
    mock, mock_table = mock_boto3
    client = DynamoDBClient(table_name="test-table")
    client.create_table_if_not_exists()
    mock_table.meta.client.create_table.assert_not_called()


def test_create_table_other_error_propagates(mock_boto3):
    mock, mock_table = mock_boto3
    mock_table.load.side_effect = ClientError(
        {"Error": {"Code": "AccessDeniedException", "Message": "denied"}},
        "DescribeTable",
    )
    client = DynamoDBClient(table_name="test-table")
    with pytest.raises(ClientError):
        client.create_table_if_not_exists()
