"""Tests for the command-line entry point."""

from eadvfs.cli import main


class TestMain:

    def test_sample_workload_without_arguments(self, capsys) -> None:
        assert main([]) == 0
        out = capsys.readouterr().out
        assert "using sample jobset" in out
        assert "Processes: 7" in out

    def test_reads_job_file(self, tmp_path, capsys) -> None:
        path = tmp_path / 'jobs.txt'
        path.write_text("0 50\n0 200\n")
        assert main([str(path)]) == 0
        out = capsys.readouterr().out
        assert "Processes: 2" in out
        assert "[P1:25ms]" in out

    def test_missing_job_file_fails(self, tmp_path, capsys) -> None:
        assert main([str(tmp_path / 'missing.txt')]) == 1
        assert "error:" in capsys.readouterr().err

    def test_malformed_job_file_fails(self, tmp_path, capsys) -> None:
        path = tmp_path / 'jobs.txt'
        path.write_text("0 fifty\n")
        assert main([str(path)]) == 1
        assert "error:" in capsys.readouterr().err

    def test_config_file_changes_the_run(self, tmp_path, capsys) -> None:
        jobs = tmp_path / 'jobs.txt'
        jobs.write_text("0 100\n")
        conf = tmp_path / 'eadvfs.conf'
        conf.write_text("level = 1.0, 2.0, only\n")
        assert main([str(jobs), '-c', str(conf)]) == 0
        out = capsys.readouterr().out
        assert "Makespan (ms): 100.000" in out
        assert "Total Energy (J): 0.200" in out

    def test_bad_config_file_fails(self, tmp_path, capsys) -> None:
        conf = tmp_path / 'eadvfs.conf'
        conf.write_text("quantum_ms = -5\n")
        assert main(['-c', str(conf)]) == 1
        assert "error:" in capsys.readouterr().err
