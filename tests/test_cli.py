"""Tests for the gtf2refflat command-line interface."""

from pathlib import Path

from click.testing import CliRunner

from gtf2refflat import __version__
from gtf2refflat.cli import main
from gtf2refflat.exceptions import FAILURE_MESSAGE


class TestHelp:
    """Tests for help and version output."""

    def test_group_help(self):
        """Main --help lists the convert command."""
        runner = CliRunner()
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "convert" in result.output

    def test_convert_help(self):
        """Convert --help shows the GTF option."""
        runner = CliRunner()
        result = runner.invoke(main, ["convert", "--help"])
        assert result.exit_code == 0
        assert "--gtf" in result.output
        assert "--sort-by-transcript" in result.output

    def test_version(self):
        """--version prints the package version."""
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_gtf_required(self):
        """Convert without --gtf is a usage error."""
        runner = CliRunner()
        result = runner.invoke(main, ["convert"])
        assert result.exit_code == 2


class TestConvert:
    """Tests for the convert command."""

    def test_success(self, scenario_a_gtf: Path):
        """Convert writes the RefFlat next to the input and exits 0."""
        runner = CliRunner()
        result = runner.invoke(main, ["-q", "convert", "--gtf", str(scenario_a_gtf)])

        assert result.exit_code == 0
        refflat = scenario_a_gtf.parent / "test.gtf.refflat"
        assert refflat.read_text() == "G1\tT1\tchr1\t+\t100\t200\t100\t200\t1\t100\t200"
        assert (scenario_a_gtf.parent / "test.gtf.gff3").exists()

    def test_reports_rows(self, scenario_b_gtf: Path):
        """Convert reports the number of rows written."""
        runner = CliRunner()
        result = runner.invoke(main, ["convert", "-g", str(scenario_b_gtf)])

        assert result.exit_code == 0
        assert "1 RefFlat rows" in result.output

    def test_output_dir(self, scenario_a_gtf: Path, tmp_path: Path):
        """--output-dir redirects both artifacts."""
        out_dir = tmp_path / "out"
        runner = CliRunner()
        result = runner.invoke(
            main, ["-q", "convert", "-g", str(scenario_a_gtf), "-o", str(out_dir)]
        )

        assert result.exit_code == 0
        assert (out_dir / "test.gtf.refflat").exists()
        assert (out_dir / "test.gtf.gff3").exists()

    def test_strand_conflict_exits_zero(self, scenario_c_gtf: Path):
        """Strand conflicts are reported but do not fail the run."""
        runner = CliRunner()
        result = runner.invoke(main, ["convert", "-g", str(scenario_c_gtf)])

        assert result.exit_code == 0
        assert "strand conflicts" in result.output

    def test_missing_input(self, tmp_path: Path):
        """A missing GTF fails with the fixed message."""
        runner = CliRunner()
        result = runner.invoke(main, ["convert", "-g", str(tmp_path / "missing.gtf")])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "CollectRnaSeqMetrics" in result.output
        assert "GTF file not found" in result.output

    def test_malformed_input(self, make_gtf):
        """A non tab-separated GTF fails with the fixed message."""
        path = make_gtf(['chr1 test exon 1 10 . + . gene_id "G1";'])
        runner = CliRunner()
        result = runner.invoke(main, ["convert", "-g", str(path)])

        assert result.exit_code == 1
        assert FAILURE_MESSAGE in " ".join(result.output.split())

    def test_config_file(self, scenario_a_gtf: Path, tmp_path: Path):
        """Settings from a TOML file are applied."""
        config_path = tmp_path / "settings.toml"
        config_path.write_text('[gtf2refflat]\nrefflat_suffix = ".refFlat.txt"\n')

        runner = CliRunner()
        result = runner.invoke(
            main, ["-q", "convert", "-g", str(scenario_a_gtf), "-c", str(config_path)]
        )

        assert result.exit_code == 0
        assert (scenario_a_gtf.parent / "test.gtf.refFlat.txt").exists()

    def test_invalid_config_file(self, scenario_a_gtf: Path, tmp_path: Path):
        """An invalid configuration file exits 1."""
        config_path = tmp_path / "settings.toml"
        config_path.write_text("unknown_key = 1\n")

        runner = CliRunner()
        result = runner.invoke(
            main, ["convert", "-g", str(scenario_a_gtf), "-c", str(config_path)]
        )

        assert result.exit_code == 1
        assert "Unknown configuration keys" in result.output

    def test_log_file(self, scenario_c_gtf: Path, tmp_path: Path):
        """--log-file captures debug and error logs."""
        log_file = tmp_path / "run.log"
        runner = CliRunner()
        result = runner.invoke(
            main, ["-q", "--log-file", str(log_file), "convert", "-g", str(scenario_c_gtf)]
        )

        assert result.exit_code == 0
        assert "same strand" in log_file.read_text()

    def test_invalid_utf8_input(self, tmp_path: Path):
        """An undecodable GTF fails with the fixed message, not a traceback."""
        path = tmp_path / "bad.gtf"
        path.write_bytes(b"chr\xff1\ttest\texon\t1\t10\t.\t+\t.\ttranscript_id \"T1\";\n")

        runner = CliRunner()
        result = runner.invoke(main, ["convert", "-g", str(path)])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Error:" in result.output
        assert FAILURE_MESSAGE in " ".join(result.output.split())

    def test_unstranded_reported(self, make_gtf):
        """Unstranded transcripts are reported and the run succeeds."""
        path = make_gtf(
            [
                'chr1\ttest\texon\t1\t10\t.\t.\t.\tgene_id "G1"; transcript_id "T1";',
                'chr1\ttest\texon\t21\t30\t.\t+\t.\tgene_id "G1"; transcript_id "T2";',
            ]
        )
        runner = CliRunner()
        result = runner.invoke(main, ["convert", "-g", str(path)])

        assert result.exit_code == 0
        assert "1 unstranded transcript(s)" in result.output
        assert "1 RefFlat rows" in result.output

    def test_yaml_config_file(self, scenario_a_gtf: Path, tmp_path: Path):
        """Settings from a YAML file are applied."""
        config_path = tmp_path / "settings.yaml"
        config_path.write_text("gtf2refflat:\n  refflat_suffix: .refFlat.txt\n")

        runner = CliRunner()
        result = runner.invoke(
            main, ["-q", "convert", "-g", str(scenario_a_gtf), "-c", str(config_path)]
        )

        assert result.exit_code == 0
        assert (scenario_a_gtf.parent / "test.gtf.refFlat.txt").exists()
