# SPDX-License-Identifier: Apache-2.0
"""Tests for cpuset counting, CPU rounding and memory unit helpers."""

import pytest

from dockres.units import (
    GiB,
    bytes_to_gb,
    count_cpuset,
    format_mem,
    parse_memory_mib,
    round_cpu,
)


# ---------------------------------------------------------------
# count_cpuset
# ---------------------------------------------------------------

class TestCountCpuset:
    def test_mixed_ranges_and_singletons(self):
        assert count_cpuset("0-3,6,8-9") == 7

    def test_single_cpu(self):
        assert count_cpuset("0") == 1

    def test_degenerate_range(self):
        assert count_cpuset("5-5") == 1

    def test_singletons_only(self):
        assert count_cpuset("1,3,5,7") == 4

    def test_large_range(self):
        assert count_cpuset("0-63") == 64

    def test_trailing_newline(self):
        assert count_cpuset("0-3\n") == 4

    def test_overlapping_counted_once(self):
        assert count_cpuset("0-3,2-5") == 6
        assert count_cpuset("1,1,1") == 1

    @pytest.mark.parametrize("text", ["", "   ", "\n"])
    def test_empty_raises(self, text):
        with pytest.raises(ValueError, match="empty cpuset"):
            count_cpuset(text)

    @pytest.mark.parametrize("text", ["a", "0-b", "1,,2", "0-3-5", "-1", "0-"])
    def test_non_numeric_raises(self, text):
        with pytest.raises(ValueError, match="invalid cpuset segment"):
            count_cpuset(text)

    def test_reversed_range_raises(self):
        with pytest.raises(ValueError, match="invalid cpuset segment '3-1'"):
            count_cpuset("0,3-1")


# ---------------------------------------------------------------
# round_cpu
# ---------------------------------------------------------------

class TestRoundCpu:
    def test_two_decimals(self):
        assert round_cpu(1 / 3) == 0.33
        assert round_cpu(2 / 3) == 0.67

    def test_half_rounds_up(self):
        assert round_cpu(0.125) == 0.13
        assert round_cpu(0.375) == 0.38

    def test_half_away_from_zero_negative(self):
        assert round_cpu(-0.125) == -0.13

    def test_already_rounded(self):
        assert round_cpu(1.5) == 1.5
        assert round_cpu(2.0) == 2.0

    def test_zero(self):
        assert round_cpu(0.0) == 0.0


# ---------------------------------------------------------------
# bytes_to_gb / format_mem / parse_memory_mib
# ---------------------------------------------------------------

class TestBytesToGb:
    def test_zero(self):
        assert bytes_to_gb(0) == 0

    def test_rounds_up(self):
        assert bytes_to_gb(1) == 1
        assert bytes_to_gb(GiB + 1) == 2

    def test_exact(self):
        assert bytes_to_gb(16 * GiB) == 16


class TestFormatMem:
    def test_whole_gigabytes(self):
        assert format_mem(1024) == "1g"
        assert format_mem(3072) == "3g"

    def test_megabytes(self):
        assert format_mem(1536) == "1536m"
        assert format_mem(512) == "512m"


class TestParseMemoryMib:
    def test_gigabytes(self):
        assert parse_memory_mib("20g") == 20480
        assert parse_memory_mib("20gb") == 20480

    def test_megabytes(self):
        assert parse_memory_mib("512m") == 512
        assert parse_memory_mib("512mb") == 512

    def test_case_insensitive(self):
        assert parse_memory_mib("16G") == 16384
        assert parse_memory_mib("256MB") == 256

    def test_with_spaces(self):
        assert parse_memory_mib("  8 g ") == 8192

    @pytest.mark.parametrize("text", ["20", "1.5g", "abc", "", "20k", "-1g"])
    def test_invalid_raises(self, text):
        with pytest.raises(ValueError, match="invalid memory size"):
            parse_memory_mib(text)
