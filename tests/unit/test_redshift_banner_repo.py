# tests/unit/test_redshift_banner_repo.py
from datetime import datetime
import pytest
from botocore.exceptions import ClientError
from banner_control.adapters.redshift_data_api_banner_repo import RedshiftDataApiBannerRepository
from banner_control.errors import DataAccessError

class FakeRedshiftData:
    def __init__(self, statuses=("FINISHED",), pages=None):
        self.statuses = list(statuses)
        self.pages = list(pages or [])
        self.executed = []

    def execute_statement(self, **kwargs):
        self.executed.append(kwargs)
        return {"Id": f"stmt-{len(self.executed)}"}

    def describe_statement(self, Id):
        status = self.statuses.pop(0) if len(self.statuses) > 1 else self.statuses[0]
        desc = {"Id": Id, "Status": status, "HasResultSet": bool(self.pages)}
        if status == "FAILED":
            desc["Error"] = "relation does not exist"
        return desc

    def get_statement_result(self, Id, NextToken=None):
        return self.pages.pop(0)

def row(i, url, start, end):
    return [{"longValue": i}, {"stringValue": url}, {"stringValue": start}, {"stringValue": end}]

def make_repo(client, target="my-workgroup"):
    return RedshiftDataApiBannerRepository(target, "dev", "arn:secret", "public", "banner",
                                           client=client, poll_interval_sec=0)

def test_insert_sends_named_parameters_to_workgroup():
    client = FakeRedshiftData()
    make_repo(client).insert("https://a.png", datetime(2018, 11, 1), datetime(2018, 11, 30, 23, 59, 59))
    call = client.executed[0]
    assert call["WorkgroupName"] == "my-workgroup"
    assert "ClusterIdentifier" not in call
    assert "INSERT INTO public.banner" in call["Sql"]
    assert {"name": "start_time", "value": "2018-11-01 00:00:00"} in call["Parameters"]
    assert {"name": "url", "value": "https://a.png"} in call["Parameters"]

def test_cluster_identifier_prefix():
    client = FakeRedshiftData()
    make_repo(client, "cluster:prod-1").create_table_if_absent()
    call = client.executed[0]
    assert call["ClusterIdentifier"] == "prod-1"
    assert "WorkgroupName" not in call
    assert "CREATE TABLE IF NOT EXISTS public.banner" in call["Sql"]

def test_select_polls_and_pages():
    pages = [
        {"Records": [row(1, "https://a.png", "2018-11-01 00:00:00", "2018-11-30 23:59:59.5")], "NextToken": "t"},
        {"Records": [row(2, "https://b.png", "2100-11-01 00:00:00", "2100-11-30 23:59:59")]},
    ]
    client = FakeRedshiftData(statuses=("SUBMITTED", "STARTED", "FINISHED"), pages=pages)
    banners = make_repo(client).select_all()
    assert [b.banner_id for b in banners] == [1, 2]
    assert banners[0].end_time == datetime(2018, 11, 30, 23, 59, 59)

def test_select_by_id_not_found():
    client = FakeRedshiftData()
    repo = make_repo(client)
    assert repo.select_by_id(3) is None
    assert client.executed[0]["Parameters"] == [{"name": "banner_id", "value": "3"}]

def test_failed_statement_is_data_access_error():
    client = FakeRedshiftData(statuses=("FAILED",))
    with pytest.raises(DataAccessError):
        make_repo(client).delete_by_id(1)

def test_client_error_is_data_access_error():
    class Denied(FakeRedshiftData):
        def execute_statement(self, **kwargs):
            raise ClientError({"Error": {"Code": "AccessDeniedException", "Message": "no"}}, "ExecuteStatement")
    with pytest.raises(DataAccessError):
        make_repo(Denied()).select_all()
