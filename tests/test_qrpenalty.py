import numpy as np

from upiqr import qrpenalty


def test_uniform_block_scores_runs_and_squares():
    qr = np.zeros((5, 5), dtype=np.uint8)
    pe = qrpenalty.penalty(qr, 5)
    # five rows and five columns with one run of 5 each
    assert pe.calc_rule1() == 30
    # 4 x 4 overlapping 2x2 blocks
    assert pe.calc_rule2() == 48
    assert pe.calc_penalty() == 78


def test_checkerboard_scores_nothing():
    r, c = np.indices((9, 9))
    qr = ((r + c) % 2).astype(np.uint8)
    pe = qrpenalty.penalty(qr, 9)
    assert pe.calc_penalty() == 0


def test_long_run_adds_one_per_extra_module():
    qr = np.zeros((7, 7), dtype=np.uint8)
    # stripes break every column into runs of 1
    qr[1::2, :] = 1
    pe = qrpenalty.penalty(qr, 7)
    # each row is a run of 7: 3 + 2
    assert pe.calc_rule1() == 7 * 5
    assert pe.calc_rule2() == 0


def test_runs_reset_on_color_change():
    assert qrpenalty.penalty.calc_runs_([0, 0, 0, 0, 1, 1, 1, 1, 1, 0]) == 3
    assert qrpenalty.penalty.calc_runs_([1] * 5 + [0] * 6) == 3 + 4
