import numpy as np

class penalty(object):
    """
    Mask penalty scoring. Only the run length rule and the 2x2 block rule
    are evaluated; finder lookalikes and the dark/light balance are not
    scored.
    """

    def __init__(self, qr, dim):
        # size of the qr code
        self.d = dim
        self.qr = qr

    #
    @staticmethod
    def calc_runs_(line) -> int:
        penalty_runs = 0
        consecutive = 1

        for n in range(1,len(line)):
            if (line[n] == line[n-1]):
                consecutive += 1

                if (consecutive == 5):
                    penalty_runs += 3
                elif (consecutive > 5):
                    penalty_runs += 1
            else:
                consecutive = 1

        return penalty_runs

    #
    def calc_rule1(self) -> int:
        # 5 consecutive pixels of the same color = 3 penalty points.
        # After 5 each additional pixel of the same color adds 1 penalty point.
        # Do check for each row and column.
        penalty_rule1 = 0

        for n in range(self.d):
            penalty_rule1 += penalty.calc_runs_(self.qr[n,:].tolist())
            penalty_rule1 += penalty.calc_runs_(self.qr[:,n].tolist())

        return penalty_rule1

    #
    def calc_rule2(self) -> int:
        # 3 points for every 2x2 block of one color, overlapping blocks
        # are counted separately
        q = self.qr
        same = ((q[:-1,:-1] == q[:-1,1:]) &
                (q[:-1,:-1] == q[1:,:-1]) &
                (q[:-1,:-1] == q[1:,1:]))

        return 3 * int(np.count_nonzero(same))

    #
    def calc_penalty(self) -> int:
        return self.calc_rule1() + self.calc_rule2()
