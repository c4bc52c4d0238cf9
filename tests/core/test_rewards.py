from __future__ import annotations

import pytest

from aex402.constants import U64_MAX
from aex402.core.rewards import calc_new_acc_reward, calc_pending_reward, farm_accrued_reward, project_acc_reward
from aex402.state.accounts import Farm


def test_pending_reward() -> None:
    assert calc_pending_reward(1_000, 2 * 10**12, 500) == 1_500


def test_pending_reward_clamps_at_zero() -> None:
    assert calc_pending_reward(1_000, 10**12, 5_000) == 0


def test_new_acc_reward() -> None:
    assert calc_new_acc_reward(0, 100, 50) == 2 * 10**12
    assert calc_new_acc_reward(7, 100, 50) == 2 * 10**12 + 7


def test_new_acc_reward_nothing_staked() -> None:
    assert calc_new_acc_reward(123, 1_000, 0) == 123


def test_rejects_out_of_range() -> None:
    with pytest.raises(ValueError):
        calc_pending_reward(U64_MAX + 1, 0, 0)
    with pytest.raises(TypeError):
        calc_new_acc_reward(0, True, 1)


class TestFarmAccrual:
    farm = Farm(reward_rate=10, start_time=100, end_time=200, total_staked=1_000, acc_reward=0, last_update=150)

    def test_clipped_to_end(self) -> None:
        assert farm_accrued_reward(self.farm, 250) == 500

    def test_before_start(self) -> None:
        farm = Farm(reward_rate=10, start_time=100, end_time=200, last_update=0)
        assert farm_accrued_reward(farm, 50) == 0
        assert farm_accrued_reward(farm, 120) == 200

    def test_project(self) -> None:
        # 500 reward over 1000 staked
        assert project_acc_reward(self.farm, 250) == 500 * 10**12 // 1_000

    def test_pending_after_projection(self) -> None:
        acc = project_acc_reward(self.farm, 250)
        assert calc_pending_reward(100, acc, 0) == 50
