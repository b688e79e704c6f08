import asyncio

import httpx
import pytest

from conftest import LEGITIMATE_TEXT, SUSPICIOUS_TEXT, backend_payload
from newsanalysis.supervisor import LOCAL_NOTICE, SUPERVISOR_NOTICE, AnalysisSupervisor


@pytest.mark.asyncio
async def test_remote_result_passes_through(make_client):
    supervisor = AnalysisSupervisor(make_client(lambda request: httpx.Response(200, json=backend_payload())))
    analysis = await supervisor.analyze(SUSPICIOUS_TEXT)
    assert analysis.source == "remote"
    assert analysis.notice is None
    assert not analysis.degraded
    assert analysis.result.prediction == "Fake"


@pytest.mark.asyncio
async def test_client_level_fallback_carries_notice(make_client):
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    analysis = await AnalysisSupervisor(make_client(handler)).analyze(SUSPICIOUS_TEXT)
    assert analysis.source == "local"
    assert analysis.notice == LOCAL_NOTICE
    assert analysis.degraded


@pytest.mark.asyncio
async def test_timeout_is_recovered_by_supervisor(make_client):
    async def handler(request):
        await asyncio.sleep(1)
        return httpx.Response(200, json=backend_payload())

    supervisor = AnalysisSupervisor(make_client(handler, timeout_ms=20))
    analysis = await supervisor.analyze(SUSPICIOUS_TEXT)
    assert analysis.source == "supervisor"
    assert analysis.notice == SUPERVISOR_NOTICE
    assert analysis.result.text_metrics.bias_indicators == ["shocking"]


@pytest.mark.asyncio
async def test_http_error_is_recovered_by_supervisor(make_client, zero_noise_reconciler):
    supervisor = AnalysisSupervisor(make_client(lambda request: httpx.Response(502, text="bad gateway")))
    analysis = await supervisor.analyze(LEGITIMATE_TEXT)
    assert analysis.source == "supervisor"
    assert analysis.result == zero_noise_reconciler.reconcile(LEGITIMATE_TEXT)


@pytest.mark.asyncio
async def test_both_fallback_stages_agree_for_same_input(make_client):
    def refused(request):
        raise httpx.ConnectError("refused", request=request)

    inner = await AnalysisSupervisor(make_client(refused)).analyze(LEGITIMATE_TEXT)
    outer = await AnalysisSupervisor(make_client(lambda request: httpx.Response(500))).analyze(LEGITIMATE_TEXT)
    again = await AnalysisSupervisor(make_client(lambda request: httpx.Response(500))).analyze(LEGITIMATE_TEXT)
    assert inner.result == outer.result == again.result
