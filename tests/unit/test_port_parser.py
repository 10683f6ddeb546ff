import logging
from srcapp.PARSERS.port_parser import PortSpecParser, parse_port_number


def as_dicts(ports):
    return [p.to_dict() for p in ports]


def test_parse_port_and_protocol():
    ports = PortSpecParser().parse({'8080/tcp': {}})
    assert as_dicts(ports) == [{'containerPort': 8080, 'protocol': 'TCP'}]


def test_protocol_defaults_to_tcp():
    ports = PortSpecParser().parse({'8080': {}})
    assert as_dicts(ports) == [{'containerPort': 8080, 'protocol': 'TCP'}]


def test_unparseable_port_is_skipped(caplog):
    with caplog.at_level(logging.WARNING, logger="srcapp"):
        ports = PortSpecParser().parse({'abc/tcp': {}})
    assert ports == []
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert warnings[0].getMessage() == 'Container port abc is not a number'


def test_order_is_preserved():
    spec = {'9090/udp': {}, 'bad': {}, '443/tcp': {}, '80': {}}
    ports = PortSpecParser().parse(spec)
    assert as_dicts(ports) == [
        {'containerPort': 9090, 'protocol': 'UDP'},
        {'containerPort': 443, 'protocol': 'TCP'},
        {'containerPort': 80, 'protocol': 'TCP'},
    ]


def test_empty_spec():
    assert PortSpecParser().parse({}) == []


def test_parse_port_number():
    assert parse_port_number('8080') == 8080
    assert parse_port_number(' 8080') == 8080
    assert parse_port_number('8080abc') == 8080
    assert parse_port_number('abc') is None
    assert parse_port_number('') is None


def test_non_ascii_digits_are_skipped(caplog):
    with caplog.at_level(logging.WARNING, logger="srcapp"):
        ports = PortSpecParser().parse({'٨٠٨٠/tcp': {}})
    assert ports == []
    assert 'is not a number' in caplog.text
    assert parse_port_number('٨٠٨٠') is None


def test_overlong_port_is_skipped(caplog):
    spec = {'9' * 5000 + '/tcp': {}, '8080/tcp': {}}
    with caplog.at_level(logging.WARNING, logger="srcapp"):
        ports = PortSpecParser().parse(spec)
    assert as_dicts(ports) == [{'containerPort': 8080, 'protocol': 'TCP'}]
    assert 'is not a number' in caplog.text
