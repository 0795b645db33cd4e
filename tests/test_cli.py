from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

import azsize.cli as cli_module
from azsize import __version__
from azsize.aggregate import aggregate_availability, compare_rows
from azsize.catalog import region_label
from azsize.errors import RateLimitError
from azsize.fanout import failure_kind
from azsize.models import CheckResult, ComparisonReport, FindReport, RegionQueryResult, VmRecord

runner = CliRunner()

VM = "Standard_D4s_v5"


def _vm(price: float | None, *, available: bool = True, restriction: str | None = None) -> VmRecord:
    return VmRecord(name=VM, available=available, vCPUs=4, memoryGB=16, pricePerMonth=price, restriction=restriction)


def _sample_results() -> dict[str, RegionQueryResult]:
    limited = RateLimitError()
    return {
        "eastus": RegionQueryResult.success("eastus", [_vm(140)]),
        "westus2": RegionQueryResult.success("westus2", [_vm(120)]),
        "centralus": RegionQueryResult.success(
            "centralus",
            [_vm(150, available=False, restriction="NotAvailableForSubscription")],
        ),
        "uksouth": RegionQueryResult.failure("uksouth", str(limited), failure_kind(limited)),
        "japaneast": RegionQueryResult.success("japaneast", []),
    }


class _FakeClient:
    def __init__(self, results: dict[str, RegionQueryResult], historical: float | None = 98.5) -> None:
        self._results = results
        self._historical = historical
        self.calls: list[tuple[str, Any]] = []

    async def __aenter__(self) -> _FakeClient:
        return self

    async def __aexit__(self, exc_type: type[BaseException] | None, exc: BaseException | None, tb: Any) -> None:
        return None

    def _query(self, regions: Sequence[str]) -> list[RegionQueryResult]:
        return [self._results[region] for region in regions]

    async def check(self, vm_size: str, region: str, *, history: bool = True, days: int = 7) -> CheckResult:
        self.calls.append(("check", region))
        vm = self._results[region].find(vm_size)
        return CheckResult(
            region=region,
            vm_size=vm_size,
            series_filter="Standard_D",
            vm=vm,
            historical=self._historical if vm is not None and history else None,
        )

    async def compare(self, vm_size: str, regions: Sequence[str]) -> ComparisonReport:
        self.calls.append(("compare", list(regions)))
        results = self._query(regions)
        return ComparisonReport(
            vm_size=vm_size,
            series_filter="Standard_D",
            results=results,
            rows=compare_rows(results, vm_size),
        )

    async def find(
        self,
        vm_size: str,
        *,
        regions: Sequence[str] | None = None,
        limit: int | None = None,
    ) -> FindReport:
        self.calls.append(("find", (list(regions) if regions else None, limit)))
        targets = list(regions) if regions else list(self._results)
        results = self._query(targets)
        available = aggregate_availability(results, vm_size, labels=region_label)
        return FindReport(
            vm_size=vm_size,
            series_filter="Standard_D",
            total_regions=len(targets),
            limit=limit,
            available=available,
            regions=available[:limit] if limit else available,
            results=results,
        )


@pytest.fixture()
def fake_client(monkeypatch: pytest.MonkeyPatch) -> _FakeClient:
    client = _FakeClient(_sample_results())
    monkeypatch.setattr(cli_module, "_make_client", lambda _state: client)
    return client


def _invoke(args: list[str]) -> Any:
    return runner.invoke(cli_module.app, args, env={"COLUMNS": "200"})


def test_version_flag() -> None:
    result = _invoke(["--version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == f"azsize {__version__}"


def test_check_table_output(fake_client: _FakeClient) -> None:
    result = _invoke(["check", VM, "--region", "eastus"])
    assert result.exit_code == 0
    assert "Region: eastus" in result.stdout
    assert "$140" in result.stdout
    assert "98.5%" in result.stdout
    assert f"{VM} is AVAILABLE in eastus" in result.stdout


def test_check_uses_configured_default_region(tmp_path: Path, fake_client: _FakeClient) -> None:
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"default_region": "westus2"}), encoding="utf-8")

    result = _invoke(["-c", str(config_file), "check", VM, "--json"])

    assert result.exit_code == 0
    assert fake_client.calls == [("check", "westus2")]
    assert json.loads(result.stdout)["region"] == "westus2"


def test_check_json_uses_wire_field_names(fake_client: _FakeClient) -> None:
    result = _invoke(["check", VM, "-r", "centralus", "--json"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["region"] == "centralus"
    assert payload["vm"]["available"] is False
    assert payload["vm"]["pricePerMonth"] == 150
    assert payload["vm"]["restriction"] == "NotAvailableForSubscription"
    assert payload["historical"] == 98.5


def test_check_csv(fake_client: _FakeClient) -> None:
    result = _invoke(["check", VM, "-r", "eastus", "--csv"])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        "VM Size,vCPUs,Memory (GB),Price/mo,Available,Restriction,Region",
        f"{VM},4,16,140,true,None,eastus",
    ]


def test_check_missing_vm_fails(fake_client: _FakeClient) -> None:
    result = _invoke(["check", VM, "-r", "japaneast"])
    assert result.exit_code == 1
    assert f"VM size {VM} not found in series Standard_D" in result.output
    assert "azsize list series" in result.output


def test_compare_json_keyed_by_region(fake_client: _FakeClient) -> None:
    result = _invoke(["-o", "json", "compare", VM, "-r", "eastus,uksouth", "-r", "japaneast"])
    assert result.exit_code == 0
    assert fake_client.calls == [("compare", ["eastus", "uksouth", "japaneast"])]
    payload = json.loads(result.stdout)
    assert list(payload) == ["eastus", "uksouth", "japaneast"]
    assert payload["eastus"]["pricePerMonth"] == 140
    assert "Rate limit exceeded" in payload["uksouth"]["error"]
    assert payload["japaneast"] == {"error": "VM not found"}
    assert "azsize auth" in result.stderr


def test_compare_defaults_to_configured_regions(tmp_path: Path, fake_client: _FakeClient) -> None:
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"compare_regions": ["westus2", "centralus"]}), encoding="utf-8")

    result = _invoke(["-c", str(config_file), "compare", VM])

    assert result.exit_code == 0
    assert fake_client.calls == [("compare", ["westus2", "centralus"])]
    assert f"{VM} is available in 1/2 regions" in result.stdout


def test_compare_csv(fake_client: _FakeClient) -> None:
    result = _invoke(["compare", VM, "-r", "eastus,centralus,japaneast", "--csv"])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        "Region,VM Size,Available,Price/mo,Restriction",
        f"eastus,{VM},true,140,None",
        f"centralus,{VM},false,150,NotAvailableForSubscription",
        f"japaneast,{VM},false,N/A,Not found",
    ]


def test_find_json_sorted_cheapest_first(fake_client: _FakeClient) -> None:
    result = _invoke(["find", VM, "--json"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["vmSize"] == VM
    assert payload["totalRegions"] == 5
    assert payload["availableRegions"] == 2
    assert [entry["region"] for entry in payload["regions"]] == ["westus2", "eastus"]
    assert payload["regions"][0]["label"] == "West US 2"
    assert payload["regions"][0]["price"] == 120


def test_find_table_with_limit(fake_client: _FakeClient) -> None:
    result = _invoke(["find", VM, "--limit", "1"])
    assert result.exit_code == 0
    assert fake_client.calls == [("find", (None, 1))]
    assert "westus2" in result.stdout
    assert "Available in 2/5 regions" in result.stdout
    assert "Most expensive: eastus ($140/mo)" in result.stdout
    assert "Showing 1 of 2 regions" in result.stdout


def test_find_rejects_non_positive_limit(fake_client: _FakeClient) -> None:
    result = _invoke(["find", VM, "--limit", "0"])
    assert result.exit_code == 2
    assert fake_client.calls == []


def test_find_csv_for_selected_regions(fake_client: _FakeClient) -> None:
    result = _invoke(["find", VM, "-r", "centralus,eastus", "--csv"])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        "Region,Display Name,Price/mo,vCPUs,Memory (GB),Restriction",
        "eastus,East US,$140,4,16,None",
    ]


def test_find_no_results(monkeypatch: pytest.MonkeyPatch) -> None:
    client = _FakeClient({"japaneast": RegionQueryResult.success("japaneast", [])})
    monkeypatch.setattr(cli_module, "_make_client", lambda _state: client)
    result = _invoke(["find", VM])
    assert result.exit_code == 0
    assert f"{VM} is not available in any region right now." in result.stdout


@pytest.mark.parametrize(("kind", "expected"), [("regions", "Azure Regions (49 total)"), ("series", "Standard_N")])
def test_list_tables(kind: str, expected: str) -> None:
    result = _invoke(["list", kind])
    assert result.exit_code == 0
    assert expected in result.stdout


def test_list_regions_json_when_explicit_output() -> None:
    result = _invoke(["-o", "json", "list", "regions"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert len(payload) == 49
    assert payload[0] == {"value": "eastus", "label": "East US"}


def test_list_invalid_type() -> None:
    result = _invoke(["list", "skus"])
    assert result.exit_code == 1
    assert "Invalid list type: skus" in result.output


def test_auth_flow(tmp_path: Path) -> None:
    config_file = str(tmp_path / "config.json")

    status = _invoke(["-c", config_file, "auth"])
    assert status.exit_code == 0
    assert "Not authenticated" in status.stdout

    saved = _invoke(["-c", config_file, "auth", "azsk_0123456789abcdef"])
    assert saved.exit_code == 0
    assert "API key saved successfully" in saved.stdout
    assert json.loads(Path(config_file).read_text(encoding="utf-8"))["api_key"] == "azsk_0123456789abcdef"

    status = _invoke(["-c", config_file, "auth"])
    assert "Authenticated" in status.stdout
    assert "API Key: azsk_0123456..." in status.stdout
    assert "50 checks per month" in status.stdout

    removed = _invoke(["-c", config_file, "auth", "logout"])
    assert removed.exit_code == 0
    assert "API key removed" in removed.stdout

    again = _invoke(["-c", config_file, "auth", "logout"])
    assert "No API key configured" in again.stdout


def test_auth_rejects_unknown_action(tmp_path: Path) -> None:
    result = _invoke(["-c", str(tmp_path / "config.json"), "auth", "sk_live_nope"])
    assert result.exit_code == 1
    assert "Invalid action or API key" in result.stdout
    assert not (tmp_path / "config.json").exists()


def test_config_info_redacts_api_key(tmp_path: Path) -> None:
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"apiKey": "azsk_secret", "default_region": "uksouth"}), encoding="utf-8")

    result = _invoke(["-c", str(config_file), "config", "info"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["api_key"] == "<redacted>"
    assert payload["default_region"] == "uksouth"
    assert payload["_source"] == "explicit-path"
    assert "azsk_secret" not in result.stdout


def test_run_reports_azsize_errors(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    def broken() -> None:
        raise RateLimitError()

    monkeypatch.setattr(cli_module, "app", broken)
    with pytest.raises(SystemExit) as excinfo:
        cli_module.run()
    assert excinfo.value.code == 1
    assert "error: Rate limit exceeded" in capsys.readouterr().err
