"""Tests for reading job lists."""

import pytest

from eadvfs.workload import WorkloadError, load_jobs, parse_jobs, sample_jobs


class TestParseJobs:

    def test_whitespace_and_comma_separated_pairs(self) -> None:
        jobs = parse_jobs(["0 120", "20,30", "  40\t50  "])
        assert jobs == [(0.0, 120.0), (20.0, 30.0), (40.0, 50.0)]

    def test_skips_blank_lines_and_comments(self) -> None:
        jobs = parse_jobs(["# arrival burst", "", "5 10"])
        assert jobs == [(5.0, 10.0)]

    def test_non_numeric_field_names_the_line(self) -> None:
        with pytest.raises(WorkloadError, match=':2:'):
            parse_jobs(["0 10", "x 10"])

    def test_wrong_field_count(self) -> None:
        with pytest.raises(WorkloadError):
            parse_jobs(["0 10 99"])

    def test_negative_arrival(self) -> None:
        with pytest.raises(WorkloadError):
            parse_jobs(["-1 10"])

    def test_zero_burst(self) -> None:
        with pytest.raises(WorkloadError):
            parse_jobs(["0 0"])

    @pytest.mark.parametrize("line", ["0 nan", "nan 10", "inf 10", "0 inf", "0 -inf"])
    def test_non_finite_values_are_rejected(self, line) -> None:
        """NaN or infinite demand would never finish, so the file is refused."""
        with pytest.raises(WorkloadError, match="finite"):
            parse_jobs(["5 10", line])

    def test_empty_input(self) -> None:
        with pytest.raises(WorkloadError, match='no jobs'):
            parse_jobs(["# nothing here"])


class TestLoadJobs:

    def test_reads_a_file(self, tmp_path) -> None:
        path = tmp_path / 'jobs.txt'
        path.write_text("0 100\n300 50\n")
        assert load_jobs(path) == [(0.0, 100.0), (300.0, 50.0)]

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(OSError):
            load_jobs(tmp_path / 'missing.txt')

    def test_sample_jobs_are_well_formed(self) -> None:
        jobs = sample_jobs()
        assert len(jobs) == 7
        assert all(arrival >= 0 and burst > 0 for arrival, burst in jobs)
