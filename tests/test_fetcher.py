import httpx
import pytest

from provisioner.domain import IOFailure
from provisioner.fileget import ProxyAwareFetcher, ProxySelector
from provisioner.settings import Settings


def build_settings(tmp_path, **overrides) -> Settings:
    defaults = {"base_dir": tmp_path, "proxies": ["DIRECT"]}
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)


class TrackingStream(httpx.SyncByteStream):
    def __init__(self, chunks, fail=False):
        self.chunks = chunks
        self.fail = fail
        self.closed = False

    def __iter__(self):
        yield from self.chunks
        if self.fail:
            raise httpx.ReadError("connection reset")

    def close(self):
        self.closed = True


def test_first_reachable_proxy_wins(tmp_path):
    seen = []

    def factory(proxy, timeout):
        seen.append(proxy)

        def handler(request: httpx.Request) -> httpx.Response:
            if proxy == "http://down:3128":
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, content=b"payload")

        return httpx.Client(transport=httpx.MockTransport(handler))

    fetcher = ProxyAwareFetcher(build_settings(tmp_path), client_factory=factory)
    target = tmp_path / "out" / "lib.jar"

    path = fetcher.copy(
        "http://repo.example/lib.jar",
        target,
        proxies=["http://down:3128", "http://up:3128", None],
    )

    assert path == target.absolute()
    assert target.read_bytes() == b"payload"
    assert seen == ["http://down:3128", "http://up:3128"]


def test_error_status_tries_next_proxy(tmp_path):
    statuses = iter([404, 200])

    def factory(proxy, timeout):
        status = next(statuses)
        return httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(status, content=b"ok")))

    fetcher = ProxyAwareFetcher(build_settings(tmp_path), client_factory=factory)

    with fetcher.open("http://repo.example/lib.jar", proxies=["http://a:1", "http://b:1"]) as stream:
        assert stream.proxy == "http://b:1"
        assert b"".join(stream.iter_bytes()) == b"ok"


def test_all_proxies_failing_returns_none(tmp_path):
    def factory(proxy, timeout):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        return httpx.Client(transport=httpx.MockTransport(handler))

    fetcher = ProxyAwareFetcher(build_settings(tmp_path), client_factory=factory)
    target = tmp_path / "lib.jar"

    assert fetcher.open("http://repo.example/lib.jar") is None
    assert fetcher.copy("http://repo.example/lib.jar", target) is None
    assert not target.exists()


def test_connect_timeout_is_passed_to_clients(tmp_path):
    timeouts = []

    def factory(proxy, timeout):
        timeouts.append(timeout)
        return httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200)))

    fetcher = ProxyAwareFetcher(build_settings(tmp_path, connect_timeout=2.5), client_factory=factory)
    fetcher.copy("http://repo.example/a.jar", tmp_path / "a.jar")

    assert timeouts[0].connect == 2.5


def test_stream_is_closed_after_copy(tmp_path):
    stream = TrackingStream([b"a", b"b"])

    def factory(proxy, timeout):
        return httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200, stream=stream)))

    fetcher = ProxyAwareFetcher(build_settings(tmp_path), client_factory=factory)
    fetcher.copy("http://repo.example/a.jar", tmp_path / "a.jar")

    assert stream.closed
    assert (tmp_path / "a.jar").read_bytes() == b"ab"


def test_stream_is_closed_when_copy_fails(tmp_path):
    stream = TrackingStream([b"partial"], fail=True)

    def factory(proxy, timeout):
        return httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200, stream=stream)))

    fetcher = ProxyAwareFetcher(build_settings(tmp_path), client_factory=factory)
    target = tmp_path / "a.jar"

    with pytest.raises(IOFailure):
        fetcher.copy("http://repo.example/a.jar", target)

    assert stream.closed
    assert not target.exists()


def test_selector_prefers_configured_proxies():
    selector = ProxySelector(["http://corp:3128", "direct"])
    assert selector.select("http://repo.example/a.jar") == ["http://corp:3128", None]


def test_selector_uses_environment():
    selector = ProxySelector(environment={"http": "http://proxy:8080", "no": "internal.example"})
    assert selector.select("http://repo.example/a.jar") == ["http://proxy:8080"]
    assert selector.select("http://internal.example/a.jar") == [None]
    assert selector.select("https://repo.example/a.jar") == [None]


def test_selector_falls_back_to_all_proxy():
    selector = ProxySelector(environment={"all": "socks5://proxy:1080"})
    assert selector.select("https://repo.example/a.jar") == ["socks5://proxy:1080"]


def test_selector_without_proxies_is_direct():
    assert ProxySelector(environment={}).select("http://repo.example/a.jar") == [None]


def test_unusable_proxy_is_skipped(tmp_path):
    seen = []

    def factory(proxy, timeout):
        seen.append(proxy)
        if proxy == "proxy.corp:3128":
            raise ValueError("Unknown scheme for proxy URL")
        if proxy == "socks5://proxy:1080":
            raise ImportError("socksio is not installed")
        return httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b"ok")))

    fetcher = ProxyAwareFetcher(build_settings(tmp_path), client_factory=factory)

    with fetcher.open(
        "http://repo.example/a.jar",
        proxies=["proxy.corp:3128", "socks5://proxy:1080", None],
    ) as stream:
        assert stream.proxy is None
    assert seen == ["proxy.corp:3128", "socks5://proxy:1080", None]


def test_schemeless_environment_proxy_yields_no_stream(tmp_path):
    selector = ProxySelector(environment={"http": "proxy.corp:3128"})
    fetcher = ProxyAwareFetcher(build_settings(tmp_path), selector=selector)

    assert fetcher.open("http://127.0.0.1:9/a.jar") is None


def test_blocked_destination_directory_raises_io_failure(tmp_path):
    blocker = tmp_path / "blocked"
    blocker.write_text("file")

    def factory(proxy, timeout):
        return httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b"ok")))

    fetcher = ProxyAwareFetcher(build_settings(tmp_path), client_factory=factory)

    with pytest.raises(IOFailure):
        fetcher.copy("http://repo.example/a.jar", blocker / "a.jar")
