# 公共模块测试

import pytest
import numpy as np
import sys
sys.path.insert(0, '.')

from radar_sweep.common.types import Position3D
from radar_sweep.common.utils.math_utils import (
    normalize_azimuth, rotate_azimuth, azimuth_window, azimuth_in_window, angle_difference
)
from radar_sweep.common.utils.coord_transform import polar_to_cartesian, cartesian_to_polar


class TestMathUtils:
    """角度工具函数测试"""

    def test_deg_to_rad(self):
        """测试度转弧度"""
        from radar_sweep.common.utils.math_utils import deg_to_rad

        assert abs(deg_to_rad(180.0) - np.pi) < 0.001
        assert abs(deg_to_rad(90.0) - np.pi/2) < 0.001

    def test_rad_to_deg(self):
        """测试弧度转度"""
        from radar_sweep.common.utils.math_utils import rad_to_deg

        assert abs(rad_to_deg(np.pi) - 180.0) < 0.001
        assert abs(rad_to_deg(np.pi/2) - 90.0) < 0.001

    @pytest.mark.parametrize("angle, expected", [
        (0.0, 0.0),
        (360.0, 0.0),
        (370.0, 10.0),
        (-10.0, 350.0),
        (-370.0, 350.0),
        (1085.0, 5.0),
        (-1085.0, 355.0),
    ])
    def test_normalize_azimuth(self, angle, expected):
        """测试方位角归一化"""
        assert normalize_azimuth(angle) == pytest.approx(expected)

    def test_normalize_tiny_negative(self):
        """极小负数不能归一化为360"""
        result = normalize_azimuth(-1e-20)
        assert 0.0 <= result < 360.0

    def test_rotate_azimuth_stays_in_range(self):
        """任意旋转量结果都在[0, 360)"""
        rng = np.random.default_rng(7)
        for _ in range(1000):
            azimuth = rng.uniform(0.0, 360.0)
            delta = rng.uniform(-5000.0, 5000.0)
            result = rotate_azimuth(azimuth, delta)
            assert 0.0 <= result < 360.0

    def test_azimuth_window_wraps(self):
        """测试跨越0°的窗口边界"""
        lo, hi = azimuth_window(5.0, 20.0)
        assert lo == pytest.approx(355.0)
        assert hi == pytest.approx(15.0)

    def test_azimuth_in_window_wraparound(self):
        """中心5°宽度20°：358°在窗口内，200°不在"""
        assert azimuth_in_window(358.0, 5.0, 20.0)
        assert azimuth_in_window(0.0, 5.0, 20.0)
        assert azimuth_in_window(15.0, 5.0, 20.0)
        assert not azimuth_in_window(200.0, 5.0, 20.0)
        assert not azimuth_in_window(16.0, 5.0, 20.0)

    def test_azimuth_in_window_plain(self):
        """不跨越0°的窗口，边界包含"""
        assert azimuth_in_window(85.0, 90.0, 10.0)
        assert azimuth_in_window(95.0, 90.0, 10.0)
        assert not azimuth_in_window(96.0, 90.0, 10.0)

    def test_full_and_zero_width(self):
        """360°窗口包含全部方位，0°窗口上下界重合，按跨越窗口处理同样包含全部方位"""
        assert azimuth_in_window(123.0, 0.0, 360.0)
        assert azimuth_in_window(30.0, 30.0, 0.0)
        assert azimuth_in_window(31.0, 30.0, 0.0)
        assert azimuth_in_window(210.0, 30.0, 0.0)

    def test_angle_difference(self):
        """测试最小角度差"""
        assert angle_difference(10.0, 350.0) == pytest.approx(20.0)
        assert angle_difference(350.0, 10.0) == pytest.approx(-20.0)


class TestCoordTransform:
    """坐标变换测试"""

    def test_polar_to_cartesian_axes(self):
        """方位0°指向X轴，90°指向Z轴，俯仰90°指向Y轴"""
        origin = Position3D(0.0, 0.0, 0.0)

        p = polar_to_cartesian(origin, 100.0, 0.0, 0.0)
        assert (p.x, p.y, p.z) == pytest.approx((100.0, 0.0, 0.0))

        p = polar_to_cartesian(origin, 100.0, 90.0, 0.0)
        assert (p.x, p.y, p.z) == pytest.approx((0.0, 0.0, 100.0), abs=1e-9)

        p = polar_to_cartesian(origin, 100.0, 0.0, 90.0)
        assert (p.x, p.y, p.z) == pytest.approx((0.0, 100.0, 0.0), abs=1e-9)

    def test_offset_origin(self):
        """结果相对于原点偏移"""
        origin = Position3D(10.0, -5.0, 3.0)
        p = polar_to_cartesian(origin, 0.0, 123.0, 45.0)
        assert p == origin

        p = polar_to_cartesian(origin, 50.0, 0.0, 0.0)
        assert (p.x, p.y, p.z) == pytest.approx((60.0, -5.0, 3.0))

    def test_out_of_range_azimuth(self):
        """超出[0, 360)的方位角与归一化后的结果一致"""
        origin = Position3D(0.0, 0.0, 0.0)
        a = polar_to_cartesian(origin, 80.0, 30.0, 12.0)
        b = polar_to_cartesian(origin, 80.0, 30.0 + 720.0, 12.0)
        c = polar_to_cartesian(origin, 80.0, 30.0 - 360.0, 12.0)
        assert (a.x, a.y, a.z) == pytest.approx((b.x, b.y, b.z))
        assert (a.x, a.y, a.z) == pytest.approx((c.x, c.y, c.z))

    def test_distance_and_round_trip(self):
        """距离保持不变，反三角函数能还原方位角和俯仰角"""
        rng = np.random.default_rng(42)
        origin = Position3D(1.0, 2.0, 3.0)

        for _ in range(500):
            distance = rng.uniform(0.1, 1000.0)
            azimuth = rng.uniform(-720.0, 720.0)
            elevation = rng.uniform(-89.0, 89.0)

            point = polar_to_cartesian(origin, distance, azimuth, elevation)
            assert point.distance_to(origin) == pytest.approx(distance, rel=1e-9)

            r, az, el = cartesian_to_polar(origin, point)
            assert r == pytest.approx(distance, rel=1e-9)
            assert abs(angle_difference(az, azimuth)) < 1e-6
            assert el == pytest.approx(elevation, abs=1e-6)

    def test_cartesian_to_polar_at_origin(self):
        """原点处返回零"""
        origin = Position3D(0.0, 0.0, 0.0)
        assert cartesian_to_polar(origin, origin) == (0.0, 0.0, 0.0)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
