"""Tests for FeieClient transport and operation wrappers."""
from __future__ import annotations

import threading
from datetime import date
from unittest.mock import patch

import pytest
import requests

from feie_print import (
    ApiError,
    ClientConfig,
    ConfigurationError,
    DecodeError,
    DelPrinterSqsRequest,
    EmptyResponseError,
    FeieClient,
    PrinterAddRequest,
    PrinterDelRequest,
    PrinterEditRequest,
    PrintLabelMsgRequest,
    PrintMsgRequest,
    PublicKeyError,
    QueryOrderInfoByDateRequest,
    QueryOrderStateRequest,
    QueryPrinterStatusRequest,
    TransportError,
)
from feie_print.signing import sha1_sign

from .conftest import TEST_UKEY, TEST_USER, make_response

OK_ORDER = {"msg": "ok", "ret": 0, "data": "816501678_20160919184316_1419533539", "serverExecutedTime": 6}


def sent_form(mock_post) -> dict:
    files = mock_post.call_args.kwargs["files"]
    return {key: value for key, (_, value) in files.items()}


class TestTransport:
    """Tests for FeieClient.request."""

    def test_print_msg_end_to_end_form(self, client):
        with patch("feie_print.client.requests.post", return_value=make_response(OK_ORDER)) as mock_post:
            client.print_msg(PrintMsgRequest(sn="123", content="hello"))

        form = sent_form(mock_post)
        assert set(form) == {"apiname", "sn", "content", "user", "stime", "sig"}
        assert form["user"] == TEST_USER
        assert form["sig"] == sha1_sign(TEST_USER, TEST_UKEY, form["stime"])
        assert TEST_UKEY not in form.values()

    def test_post_target_and_headers(self, client, config):
        with patch("feie_print.client.requests.post", return_value=make_response(OK_ORDER)) as mock_post:
            client.print_msg(PrintMsgRequest(sn="123", content="hello"))

        assert mock_post.call_args.args[0] == config.gateway
        assert mock_post.call_args.kwargs["headers"]["User-Agent"] == config.user_agent
        assert mock_post.call_args.kwargs["timeout"] == 5

    def test_returns_raw_body(self, client):
        with patch("feie_print.client.requests.post", return_value=make_response(content=b"raw")):
            assert client.request("Open_printMsg", {"sn": "1"}) == b"raw"

    def test_empty_body_never_decoded(self, client):
        with patch("feie_print.client.requests.post", return_value=make_response(content=b"")), \
                patch("feie_print.client.json.loads") as mock_loads:
            with pytest.raises(EmptyResponseError):
                client.print_msg(PrintMsgRequest(sn="123", content="hello"))
        mock_loads.assert_not_called()

    def test_timeout_maps_to_transport_error(self, client):
        with patch("feie_print.client.requests.post", side_effect=requests.exceptions.ConnectTimeout()):
            with pytest.raises(TransportError) as exc_info:
                client.print_msg(PrintMsgRequest(sn="123", content="hello"))
        assert isinstance(exc_info.value.__cause__, requests.exceptions.Timeout)

    @pytest.mark.parametrize("error", [
        requests.exceptions.ConnectionError("refused"),
        requests.exceptions.SSLError("handshake"),
    ])
    def test_connection_errors_map_to_transport_error(self, client, error):
        with patch("feie_print.client.requests.post", side_effect=error):
            with pytest.raises(TransportError):
                client.query_printer_status(QueryPrinterStatusRequest("sn1"))

    def test_malformed_json(self, client):
        with patch("feie_print.client.requests.post", return_value=make_response(content=b"{not json")):
            with pytest.raises(DecodeError) as exc_info:
                client.print_msg(PrintMsgRequest(sn="123", content="hello"))
        assert exc_info.value.body == b"{not json"

    def test_non_envelope_json(self, client):
        with patch("feie_print.client.requests.post", return_value=make_response([1, 2, 3])):
            with pytest.raises(DecodeError):
                client.print_msg(PrintMsgRequest(sn="123", content="hello"))

    def test_wrong_data_shape(self, client):
        payload = {"msg": "ok", "ret": 0, "data": {"unexpected": 1}, "serverExecutedTime": 1}
        with patch("feie_print.client.requests.post", return_value=make_response(payload)):
            with pytest.raises(DecodeError):
                client.print_msg(PrintMsgRequest(sn="123", content="hello"))

    def test_missing_credentials(self, config):
        client = FeieClient(config, ukey="")
        with patch("feie_print.client.requests.post") as mock_post:
            with pytest.raises(ConfigurationError):
                client.print_msg(PrintMsgRequest(sn="123", content="hello"))
        mock_post.assert_not_called()

    def test_per_request_user_does_not_leak(self, client):
        with patch("feie_print.client.requests.post", return_value=make_response(OK_ORDER)) as mock_post:
            client.print_msg(PrintMsgRequest(sn="123", content="a", user="other@example.com"))
            assert sent_form(mock_post)["user"] == "other@example.com"

            client.print_msg(PrintMsgRequest(sn="123", content="b"))
            assert sent_form(mock_post)["user"] == TEST_USER


class TestOperations:
    """Tests for response decoding per operation."""

    def _call(self, client, method, req, payload):
        with patch("feie_print.client.requests.post", return_value=make_response(payload)) as mock_post:
            resp = getattr(client, method)(req)
        return resp, sent_form(mock_post)

    def test_print_msg_order_id(self, client):
        resp, form = self._call(client, "print_msg", PrintMsgRequest(sn="1", content="x", times=2), OK_ORDER)
        assert resp.ok
        assert resp.data == "816501678_20160919184316_1419533539"
        assert resp.server_executed_time == 6
        assert form["times"] == "2"

    def test_print_label_msg(self, client):
        resp, form = self._call(
            client, "print_label_msg", PrintLabelMsgRequest(sn="1", content="x", img="aGk="), OK_ORDER
        )
        assert resp.data == OK_ORDER["data"]
        assert form["apiname"] == "Open_printLabelMsg"
        assert form["img"] == "aGk="

    def test_add_printers(self, client):
        payload = {
            "msg": "ok", "ret": 0,
            "data": {"ok": ["sn1#key1#front"], "no": ["sn2#key2 (错误：识别码不正确)"]},
            "serverExecutedTime": 3,
        }
        resp, form = self._call(client, "add_printers", PrinterAddRequest("sn1#key1#front\nsn2#key2"), payload)
        assert resp.data.ok == ["sn1#key1#front"]
        assert len(resp.data.no) == 1
        assert form["printerContent"] == "sn1#key1#front\nsn2#key2"

    def test_delete_printers(self, client):
        payload = {"msg": "ok", "ret": 0, "data": {"ok": ["sn1"], "no": []}, "serverExecutedTime": 3}
        resp, form = self._call(client, "delete_printers", PrinterDelRequest(["sn1", "sn2"]), payload)
        assert resp.data.ok == ["sn1"]
        assert form["snlist"] == "sn1-sn2"

    def test_edit_printer(self, client):
        payload = {"msg": "ok", "ret": 0, "data": True, "serverExecutedTime": 3}
        resp, form = self._call(client, "edit_printer", PrinterEditRequest("sn1", "Bar"), payload)
        assert resp.data is True
        assert "phonenum" not in form

    def test_clear_printer_queue(self, client):
        payload = {"msg": "ok", "ret": 0, "data": True, "serverExecutedTime": 3}
        resp, form = self._call(client, "clear_printer_queue", DelPrinterSqsRequest("sn1"), payload)
        assert resp.data is True
        assert form["apiname"] == "Open_delPrinterSqs"

    def test_query_order_state(self, client):
        payload = {"msg": "ok", "ret": 0, "data": False, "serverExecutedTime": 3}
        resp, form = self._call(client, "query_order_state", QueryOrderStateRequest("abc"), payload)
        assert resp.data is False
        assert form["orderid"] == "abc"

    def test_query_order_info_by_date(self, client):
        payload = {"msg": "ok", "ret": 0, "data": {"print": 6, "waiting": 1}, "serverExecutedTime": 3}
        resp, form = self._call(
            client, "query_order_info_by_date", QueryOrderInfoByDateRequest("sn1", date(2016, 9, 20)), payload
        )
        assert resp.data.print_count == 6
        assert resp.data.waiting == 1
        assert form["date"] == "2016-09-20"

    def test_query_printer_status(self, client):
        payload = {"msg": "ok", "ret": 0, "data": "在线，工作状态正常。", "serverExecutedTime": 3}
        resp, _ = self._call(client, "query_printer_status", QueryPrinterStatusRequest("sn1"), payload)
        assert resp.data == "在线，工作状态正常。"

    def test_api_error_envelope(self, client):
        payload = {"msg": "参数错误 : 该帐号未注册.", "ret": -2, "data": None, "serverExecutedTime": 37}
        resp, _ = self._call(client, "print_msg", PrintMsgRequest(sn="1", content="x"), payload)
        assert not resp.ok
        assert resp.data is None
        with pytest.raises(ApiError) as exc_info:
            resp.raise_for_ret()
        assert exc_info.value.ret == -2
        assert exc_info.value.apiname == "Open_printMsg"


class TestCredentials:
    """Tests for credential swapping."""

    def test_set_user_key(self, client):
        client.set_user_key("newkey")
        assert client.credentials.ukey == "newkey"
        assert client.credentials.user == TEST_USER

        with patch("feie_print.client.requests.post", return_value=make_response(OK_ORDER)) as mock_post:
            client.print_msg(PrintMsgRequest(sn="1", content="x"))
        form = sent_form(mock_post)
        assert form["sig"] == sha1_sign(TEST_USER, "newkey", form["stime"])

    def test_reset_restores_configured_credentials(self, client):
        client.set_user_key("newkey", user="someone@else")
        client.reset()
        assert client.credentials.user == TEST_USER
        assert client.credentials.ukey == TEST_UKEY

    def test_concurrent_calls_sign_with_one_snapshot(self, client):
        pairs = {"alpha@example.com": "alpha-key", "beta@example.com": "beta-key"}
        forms = []
        forms_lock = threading.Lock()
        stop = threading.Event()

        def fake_post(url, files, headers, timeout):
            with forms_lock:
                forms.append({key: value for key, (_, value) in files.items()})
            return make_response(OK_ORDER)

        def swap_credentials():
            users = list(pairs)
            i = 0
            while not stop.is_set():
                user = users[i % 2]
                client.set_user_key(pairs[user], user=user)
                i += 1

        def submit_jobs():
            for _ in range(50):
                client.print_msg(PrintMsgRequest(sn="1", content="x"))

        client.set_user_key(pairs["alpha@example.com"], user="alpha@example.com")
        with patch("feie_print.client.requests.post", side_effect=fake_post):
            swapper = threading.Thread(target=swap_credentials)
            workers = [threading.Thread(target=submit_jobs) for _ in range(8)]
            swapper.start()
            for worker in workers:
                worker.start()
            for worker in workers:
                worker.join()
            stop.set()
            swapper.join()

        assert len(forms) == 400
        for form in forms:
            assert form["user"] in pairs
            assert form["sig"] == sha1_sign(form["user"], pairs[form["user"]], form["stime"])


class TestConstruction:
    """Tests for client construction."""

    def test_overrides(self, config):
        client = FeieClient(config, timeout=2.5, user_agent="test-agent")
        assert client.config.timeout == 2.5
        assert client.config.user_agent == "test-agent"
        assert config.timeout == 5

    def test_bad_public_key_fails_at_construction(self, config):
        with pytest.raises(PublicKeyError):
            FeieClient(config, public_key="not a key")

    def test_from_env(self, monkeypatch):
        monkeypatch.setattr("feie_print.config.USER", "env@example.com")
        monkeypatch.setattr("feie_print.config.UKEY", "envkey")
        monkeypatch.setattr("feie_print.config.PUBLIC_KEY", "")
        cfg = ClientConfig.from_env()
        assert cfg.user == "env@example.com"
        assert cfg.ukey == "envkey"
        assert cfg.public_key is None
