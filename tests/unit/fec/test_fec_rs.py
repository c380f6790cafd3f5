# tests/unit/fec/test_fec_rs.py
from __future__ import annotations

import random

import numpy as np
import pytest

from qrcore.protocol import gf256
from qrcore.protocol.fec.fec_rs import (
    Config,
    generate_ec_codewords,
    generator_poly,
    rs_check,
    rs_encode,
    syndromes,
    tx,
)


@pytest.mark.parametrize("degree", [0, 1, 7, 10, 15, 25, 30])
def test_generator_poly_is_monic_with_degree_plus_one_coeffs(degree: int):
    g = generator_poly(degree)
    assert len(g) == degree + 1
    assert g[0] == 1


def test_generator_poly_degree_10_known_exponents():
    # x^10 + a^251 x^9 + a^67 x^8 + ... + a^45
    log = gf256.get_tables().log
    g = generator_poly(10)
    assert [log[c] for c in g] == [0, 251, 67, 46, 61, 118, 70, 64, 94, 32, 45]


def test_generator_poly_roots():
    exp = gf256.get_tables().exp
    g = generator_poly(15)
    for i in range(15):
        assert gf256.poly_eval(g, exp[i]) == 0


def test_generator_poly_returns_fresh_list():
    g = generator_poly(7)
    g[0] = 99
    assert generator_poly(7)[0] == 1


def test_generator_poly_rejects_negative():
    with pytest.raises(ValueError):
        generator_poly(-1)


def test_ec_codewords_hello_world_1m(hello_world_vector):
    data, expected = hello_world_vector
    assert list(generate_ec_codewords(data, nsym=10)) == expected


def test_ec_codewords_count_and_determinism():
    data = [32, 65, 70, 73, 80, 82]
    a = generate_ec_codewords(data, nsym=10)
    b = generate_ec_codewords(data, nsym=10)
    assert len(a) == 10
    assert a == b


@pytest.mark.parametrize("nsym", [7, 15, 25, 30])
def test_ec_codewords_length_per_level(nsym: int):
    assert len(generate_ec_codewords(b"Test", nsym=nsym)) == nsym


def test_ec_codewords_nonzero_for_short_nonzero_data():
    # deg(data) < deg(generator) and the roots are nonzero, so the remainder cannot vanish
    assert any(generate_ec_codewords([5, 10, 20, 30, 40], nsym=5))

    rng = random.Random(99)
    for _ in range(200):
        nsym = rng.randrange(1, 31)
        n = rng.randrange(1, nsym + 1)
        data = [rng.randrange(256) for _ in range(n)]
        if not any(data):
            continue
        assert any(generate_ec_codewords(data, nsym=nsym))


def test_ec_codewords_empty_data_is_all_zero():
    assert generate_ec_codewords([], nsym=7) == bytes(7)


def test_rs_encode_is_systematic_and_checks_clean():
    rng = random.Random(1234)
    msg = bytes(rng.randrange(256) for _ in range(40))
    cw = rs_encode(msg, nsym=15)
    assert cw[:40] == msg
    assert len(cw) == 55
    assert rs_check(cw, nsym=15)
    assert syndromes(cw, nsym=15) == [0] * 15


def test_rs_check_detects_single_byte_corruption():
    rng = random.Random(5678)
    msg = bytes(rng.randrange(256) for _ in range(20))
    cw = bytearray(rs_encode(msg, nsym=10))
    for p in rng.sample(range(len(cw)), 5):
        bad = bytearray(cw)
        bad[p] ^= rng.randrange(1, 256)
        assert not rs_check(bad, nsym=10)


def test_ec_codewords_input_validation():
    with pytest.raises(ValueError):
        generate_ec_codewords([1, 2, 256], nsym=5)
    with pytest.raises(ValueError):
        generate_ec_codewords([1, 2, 3], nsym=0)
    with pytest.raises(TypeError):
        generate_ec_codewords([1, 2, 3], nsym=2.5)
    with pytest.raises(TypeError):
        generate_ec_codewords([1, 2, 3], nsym=True)
    with pytest.raises(TypeError):
        generate_ec_codewords([1, 2.0, 3], nsym=5)


def test_ec_codewords_accept_numpy_byte_buffers():
    data = np.frombuffer(b"Test", dtype=np.uint8)
    assert generate_ec_codewords(data, nsym=7) == generate_ec_codewords(b"Test", nsym=7)
    assert rs_check(np.frombuffer(rs_encode(b"Test", nsym=7), dtype=np.uint8), nsym=7)


def test_module_surface_tx():
    data = b"hello"
    assert tx(data, cfg=Config(nsym=7)) == generate_ec_codewords(data, nsym=7)
    assert len(tx(data, cfg=Config())) == 15
    with pytest.raises(TypeError):
        tx("hello", cfg=Config())
