import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiohttp import ClientConnectionError

from conftest import TEST_HUB_IP, TEST_TOKEN
from pydirigera.exceptions import TransportError
from pydirigera.management import request_builder
from pydirigera.management.request_builder import HubEndpoint
from pydirigera.management.transport import AiohttpTransport

TEST_ENDPOINT = HubEndpoint(TEST_HUB_IP, TEST_TOKEN)


def _session_returning(status, body):
    response = MagicMock()
    response.status = status
    response.read = AsyncMock(return_value=body)

    session = MagicMock()
    session.request.return_value.__aenter__ = AsyncMock(return_value=response)
    session.request.return_value.__aexit__ = AsyncMock(return_value=None)
    session.close = AsyncMock()
    return session

def _session_raising(error):
    session = MagicMock()
    session.request.side_effect = error
    session.close = AsyncMock()
    return session


@pytest.mark.asyncio
async def test_send_passes_request_through():
    session = _session_returning(200, b"[]")
    transport = AiohttpTransport(session)
    request = request_builder.build_device_patch_request(TEST_ENDPOINT, "light-1", {"is_on": True})

    response = await transport.send(request)

    assert response.status == 200
    assert response.body == b"[]"
    session.request.assert_called_once_with(
        "PATCH",
        f"https://{TEST_HUB_IP}:8443/v1/devices/light-1",
        headers=request.headers,
        data=b'[{"attributes":{"isOn":true}}]',
        ssl=False,
    )

@pytest.mark.asyncio
async def test_error_status_is_returned_not_raised():
    transport = AiohttpTransport(_session_returning(500, b"oops"))

    response = await transport.send(request_builder.build_devices_request(TEST_ENDPOINT))

    assert response.ok is False
    assert response.body == b"oops"

@pytest.mark.asyncio
@pytest.mark.parametrize("error", [ClientConnectionError("refused"), asyncio.TimeoutError()])
async def test_network_errors_become_transport_errors(error):
    transport = AiohttpTransport(_session_raising(error))

    with pytest.raises(TransportError) as err:
        await transport.send(request_builder.build_scenes_request(TEST_ENDPOINT))

    assert err.value.__cause__ is error
    assert TEST_TOKEN not in str(err.value)

@pytest.mark.asyncio
async def test_close_leaves_callers_session_open():
    session = _session_returning(200, b"[]")
    transport = AiohttpTransport(session)

    await transport.close()

    session.close.assert_not_called()

@pytest.mark.asyncio
async def test_close_closes_owned_session(mocker):
    session = _session_returning(200, b"[]")
    session_class = mocker.patch("pydirigera.management.transport.ClientSession", return_value=session)
    transport = AiohttpTransport()

    await transport.send(request_builder.build_devices_request(TEST_ENDPOINT))
    await transport.close()

    session_class.assert_called_once_with()
    session.close.assert_awaited_once()

@pytest.mark.asyncio
async def test_session_created_after_close_is_owned(mocker):
    callers_session = _session_returning(200, b"[]")
    own_session = _session_returning(200, b"[]")
    mocker.patch("pydirigera.management.transport.ClientSession", return_value=own_session)
    transport = AiohttpTransport(callers_session)

    await transport.close()
    await transport.send(request_builder.build_devices_request(TEST_ENDPOINT))
    await transport.close()

    callers_session.close.assert_not_called()
    own_session.close.assert_awaited_once()
