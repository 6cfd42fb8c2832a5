import logging
import time
import boto3
from botocore.exceptions import BotoCoreError, ClientError
from datetime import datetime
from typing import Any, Dict, List, Optional
from ..domain.models import Banner
from ..errors import DataAccessError
from ..ports.banner_repository import BannerRepository
from ..services.normalize.timestamps import to_storage_text, truncate_to_seconds

_CREATE_SQL = """
CREATE TABLE IF NOT EXISTS {schema}.{table} (
    id         BIGINT IDENTITY(1,1),
    url        VARCHAR(2048) NOT NULL,
    start_time TIMESTAMP NOT NULL,
    end_time   TIMESTAMP NOT NULL,
    PRIMARY KEY (id)
)
"""
_INSERT_SQL = """
INSERT INTO {schema}.{table} (url, start_time, end_time)
VALUES (:url, CAST(:start_time AS TIMESTAMP), CAST(:end_time AS TIMESTAMP))
"""
_DELETE_SQL = "DELETE FROM {schema}.{table} WHERE id = :banner_id"
_SELECT_SQL = """
SELECT id, url, start_time, end_time
FROM {schema}.{table}
{where}
ORDER BY id
"""

_PENDING = ("SUBMITTED", "PICKED", "STARTED")

class RedshiftDataApiBannerRepository(BannerRepository):
    def __init__(self, workgroup_or_cluster: str, database: str, secret_arn: str,
                 schema: str, table: str, *, client=None, poll_interval_sec: float = 0.25):
        self._client = client if client is not None else boto3.client("redshift-data")
        self._wg_or_cluster = workgroup_or_cluster
        self._db = database
        self._secret = secret_arn
        self._schema = schema
        self._table = table
        self._poll = poll_interval_sec

    def _sql(self, template: str, **extra: str) -> str:
        return template.format(schema=self._schema, table=self._table, **extra)

    def _execute(self, sql: str, params: Optional[Dict[str, str]] = None) -> List[List[Dict[str, Any]]]:
        exec_args: Dict[str, Any] = dict(
            Database=self._db,
            SecretArn=self._secret,
            Sql=sql,
        )
        if params:
            exec_args["Parameters"] = [{"name": k, "value": v} for k, v in params.items()]
        # Serverless workgroup unless prefixed with "cluster:"
        if self._wg_or_cluster and not self._wg_or_cluster.lower().startswith("cluster:"):
            exec_args["WorkgroupName"] = self._wg_or_cluster
        else:
            exec_args["ClusterIdentifier"] = self._wg_or_cluster.replace("cluster:", "")

        try:
            sid = self._client.execute_statement(**exec_args)["Id"]
            desc = self._client.describe_statement(Id=sid)
            while desc["Status"] in _PENDING:
                time.sleep(self._poll)
                desc = self._client.describe_statement(Id=sid)
            if desc["Status"] != "FINISHED":
                raise DataAccessError(f"Redshift Data API failed: {desc.get('Status')} {desc.get('Error', '')}")
            logging.debug("redshift statement=%s finished", sid)
            if not desc.get("HasResultSet"):
                return []

            records: List[List[Dict[str, Any]]] = []
            page = self._client.get_statement_result(Id=sid)
            records.extend(page["Records"])
            while page.get("NextToken"):
                page = self._client.get_statement_result(Id=sid, NextToken=page["NextToken"])
                records.extend(page["Records"])
            return records
        except (BotoCoreError, ClientError) as e:
            raise DataAccessError(f"Redshift Data API call failed: {e}") from e

    @staticmethod
    def _to_banner(r: List[Dict[str, Any]]) -> Banner:
        # field order matches the SELECT
        id_v    = list(r[0].values())[0]
        url_v   = list(r[1].values())[0]
        start_v = list(r[2].values())[0]
        end_v   = list(r[3].values())[0]
        return Banner(
            banner_id=int(id_v),
            url=url_v,
            start_time=truncate_to_seconds(start_v),
            end_time=truncate_to_seconds(end_v),
        )

    def create_table_if_absent(self) -> None:
        self._execute(self._sql(_CREATE_SQL))

    def insert(self, url: str, start_utc: datetime, end_utc: datetime) -> None:
        self._execute(self._sql(_INSERT_SQL), {
            "url": url,
            "start_time": to_storage_text(start_utc),
            "end_time": to_storage_text(end_utc),
        })

    def delete_by_id(self, banner_id: int) -> None:
        self._execute(self._sql(_DELETE_SQL), {"banner_id": str(banner_id)})

    def select_by_id(self, banner_id: int) -> Optional[Banner]:
        rows = self._execute(self._sql(_SELECT_SQL, where="WHERE id = :banner_id"),
                             {"banner_id": str(banner_id)})
        return self._to_banner(rows[0]) if rows else None

    def select_all(self) -> List[Banner]:
        rows = self._execute(self._sql(_SELECT_SQL, where=""))
        return [self._to_banner(r) for r in rows]
