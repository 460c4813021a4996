import threading
import time
import unittest

from tinyioc import Container


class TestLifetimeControl(unittest.TestCase):
    cont: Container

    def setUp(self):
        self.cont = Container()
        self.calls = 0

    def _make(self, _):
        self.calls += 1
        return object()

    def test_singleton_returns_same_instance_and_creates_once(self):
        self.cont.singleton("A", self._make)
        a1 = self.cont.get("A")
        a2 = self.cont.get("A")
        assert a2 is a1, "singleton should return the cached instance"
        assert self.calls == 1

    def test_bind_returns_new_instances(self):
        self.cont.bind("A", self._make)
        a1 = self.cont.get("A")
        a2 = self.cont.get("A")
        assert a2 is not a1, "bind should return new instances"
        assert self.calls == 2

    def test_factory_and_constant_are_not_cached(self):
        def make_factory(c):
            self._make(c)
            return lambda: None

        self.cont.factory("F", make_factory)
        self.cont.constant("K", self._make)
        self.cont.get("F")
        self.cont.get("F")
        self.cont.get("K")
        self.cont.get("K")
        assert self.calls == 4

    def test_singleton_through_alias_is_cached_under_canonical_id(self):
        self.cont.singleton("A", self._make)
        self.cont.alias("A", "A_alias")
        via_alias = self.cont.get("A_alias")
        assert self.cont.get("A") is via_alias
        assert self.calls == 1


class TestSingletonConcurrency(unittest.TestCase):
    def test_concurrent_get_creates_singleton_once(self):
        cont = Container()
        calls = []

        def slow(_):
            calls.append(1)
            time.sleep(0.01)
            return object()

        cont.singleton("A", slow)

        results = []
        threads = [threading.Thread(target=lambda: results.append(cont.get("A"))) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 1
        assert len(results) == 8
        assert all(r is results[0] for r in results)

    def test_creator_may_resolve_from_same_container(self):
        cont = Container()
        cont.singleton("db", lambda _: object())
        cont.singleton("repo", lambda c: ("repo", c.get("db")))

        repo = cont.get("repo")
        assert repo[1] is cont.get("db")

    def test_creator_may_wait_on_get_from_another_thread(self):
        cont = Container()
        cont.singleton("db", lambda _: object())

        def make_service(c):
            found = []
            worker = threading.Thread(target=lambda: found.append(c.get("db")))
            worker.start()
            worker.join(timeout=2)
            assert not worker.is_alive(), "worker thread could not resolve 'db'"
            return ("service", found[0])

        cont.singleton("service", make_service)

        service = cont.get("service")
        assert service[1] is cont.get("db")

    def test_transient_creators_run_concurrently(self):
        cont = Container()
        barrier = threading.Barrier(2, timeout=2)

        def meet(_):
            # Both creators must be inside at the same time to pass the barrier
            barrier.wait()
            return object()

        cont.bind("A", meet)

        errors = []

        def resolve():
            try:
                cont.get("A")
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        threads = [threading.Thread(target=resolve) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
