from reconkit import limits


class _FakeResource:
    RLIMIT_NOFILE = 7
    RLIM_INFINITY = -1

    def __init__(self, soft, hard, fail_set=False):
        self.soft = soft
        self.hard = hard
        self.fail_set = fail_set

    def getrlimit(self, which):
        assert which == self.RLIMIT_NOFILE
        return (self.soft, self.hard)

    def setrlimit(self, which, values):
        if self.fail_set:
            raise ValueError("not permitted")
        self.soft, self.hard = values


def test_soft_limit_is_raised_to_hard_limit(monkeypatch):
    fake = _FakeResource(256, 512)
    monkeypatch.setattr(limits, "resource", fake)
    assert limits.get_file_limit() == 512
    assert fake.soft == 512


def test_limit_is_capped_at_default(monkeypatch):
    monkeypatch.setattr(limits, "resource", _FakeResource(256, 50000))
    assert limits.get_file_limit() == 10000


def test_failed_raise_keeps_current_soft_limit(monkeypatch):
    monkeypatch.setattr(limits, "resource", _FakeResource(256, 512, fail_set=True))
    assert limits.get_file_limit() == 256


def test_unlimited_gives_default(monkeypatch):
    monkeypatch.setattr(limits, "resource", _FakeResource(-1, -1))
    assert limits.get_file_limit() == 10000


def test_without_resource_module_default_is_used(monkeypatch):
    monkeypatch.setattr(limits, "resource", None)
    assert limits.get_file_limit() == 10000


def test_real_limit_is_positive_and_capped():
    value = limits.get_file_limit()
    assert 0 < value <= 10000