import threading

import pytest

from upiqr import galois


def test_exponent_table_wraps_with_primitive_polynomial():
    gf = galois.galois_field_256()
    assert gf.e2g(0) == 1
    assert gf.e2g(1) == 2
    assert gf.e2g(7) == 128
    # 2^8 = 256 -> 256 ^ 0x11d
    assert gf.e2g(8) == 29
    # doubled table repeats after 255 entries
    assert gf.e2g(255) == 1
    assert len(gf.ex_to_gf) == 512


def test_log_is_inverse_of_exp():
    gf = galois.galois_field_256()
    for n in range(255):
        assert gf.g2e(gf.e2g(n)) == n


def test_mul_zero_and_known_products():
    gf = galois.galois_field_256()
    assert gf.mul(0, 123) == 0
    assert gf.mul(77, 0) == 0
    assert gf.mul(1, 200) == 200
    assert gf.mul(2, 128) == 29
    assert gf.mul(3, 7) == 9


def test_mul_is_commutative_and_associative():
    gf = galois.galois_field_256()
    for a in (1, 2, 3, 29, 91, 200, 255):
        for b in (5, 17, 128, 254):
            assert gf.mul(a, b) == gf.mul(b, a)
            assert gf.mul(gf.mul(a, b), 7) == gf.mul(a, gf.mul(b, 7))


def test_tables_are_shared_between_instances():
    a = galois.galois_field_256()
    b = galois.polynomial()
    assert a.ex_to_gf is b.ex_to_gf
    assert a.gf_to_ex is b.gf_to_ex


def test_tables_built_once_under_concurrency():
    seen = []

    def build():
        seen.append(galois.galois_field_256().ex_to_gf)

    threads = [threading.Thread(target=build) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert all(s is seen[0] for s in seen)


def test_polymul_small_generator():
    poly = galois.polynomial()
    # (x + 1)(x + 2) = x^2 + 3x + 2
    assert poly.polymul([1, 1], [1, 2]) == [1, 3, 2]


def test_generator_matches_tabulated_exponents():
    gf = galois.galois_field_256()
    exponents = (251, 67, 46, 61, 118, 70, 64, 94, 32, 45)
    expected = (1,) + tuple(gf.e2g(e) for e in exponents)
    assert galois.generator.get_by_ecc_codewords(10) == expected


def test_generator_is_memoised_and_order_independent():
    g26 = galois.generator.get_by_ecc_codewords(26)
    g7 = galois.generator.get_by_ecc_codewords(7)
    assert galois.generator.get_by_ecc_codewords(26) is g26
    assert len(g26) == 27
    assert len(g7) == 8


def test_generator_rejects_zero_size():
    with pytest.raises(ValueError):
        galois.generator.get_by_ecc_codewords(0)


def test_polymod_reed_solomon_reference_block():
    # "HELLO WORLD" in version 1-M, alphanumeric mode
    data = [32, 91, 11, 120, 209, 114, 220, 77, 67, 64, 236, 17, 236, 17, 236, 17]
    gen = galois.generator.get_by_ecc_codewords(10)
    ecc = galois.polynomial().polymod(data + [0] * 10, gen)
    assert ecc == [196, 35, 39, 119, 235, 215, 231, 226, 93, 23]


def test_polymod_of_codeword_is_zero():
    poly = galois.polynomial()
    gen = galois.generator.get_by_ecc_codewords(10)
    data = [64, 84, 132, 84, 196, 196, 240, 236, 17, 236, 17, 236, 17, 236, 17, 236]
    ecc = poly.polymod(data + [0] * 10, gen)
    assert poly.polymod(data + ecc, gen) == [0] * 10
