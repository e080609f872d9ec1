import boto3

DEFAULT_NAMESPACE = "sales_records"


class InMemoryStore:
    """Process-local store. Lives only as long as the warm container."""

    def __init__(self):
        self.data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str):
        self.data[key] = value

    def keys(self, prefix: str = "") -> list[str]:
        return [k for k in self.data if k.startswith(prefix)]


class DynamoDBStore:
    """String key/value pairs in one DynamoDB partition.

    Table schema: partition key ``namespace`` (S), sort key ``record_key`` (S).
    Values live in the ``record_value`` attribute.
    """

    def __init__(self, table: str, namespace: str = DEFAULT_NAMESPACE, client=None):
        self.table = table
        self.namespace = namespace
        self.ddb = client or boto3.client("dynamodb")

    def _key(self, key: str) -> dict:
        return {"namespace": {"S": self.namespace}, "record_key": {"S": key}}

    def get(self, key: str) -> str | None:
        resp = self.ddb.get_item(TableName=self.table, Key=self._key(key))
        item = resp.get("Item")
        if not item:
            return None
        return item["record_value"]["S"]

    def set(self, key: str, value: str):
        self.ddb.put_item(TableName=self.table, Item={
            "namespace": {"S": self.namespace},
            "record_key": {"S": key},
            "record_value": {"S": value},
        })

    def keys(self, prefix: str = "") -> list[str]:
        params = {
            "TableName": self.table,
            "KeyConditionExpression": "#ns = :ns AND begins_with(#k, :prefix)",
            "ExpressionAttributeNames": {"#ns": "namespace", "#k": "record_key"},
            "ExpressionAttributeValues": {":ns": {"S": self.namespace}, ":prefix": {"S": prefix}},
            "ProjectionExpression": "#k",
        }
        found = []
        while True:
            resp = self.ddb.query(**params)
            found.extend(item["record_key"]["S"] for item in resp.get("Items", []))
            last = resp.get("LastEvaluatedKey")
            if not last:
                break
            params["ExclusiveStartKey"] = last
        return found
