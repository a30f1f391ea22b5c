"""Tests for the checker, the batch summary and the command line."""

import io
import logging
import math

import pytest

from autbasis import cli
from autbasis.automaton.dfa import Automaton
from autbasis.checker import AdditiveBasisChecker, check_automaton, check_encoding
from autbasis.config import Config
from autbasis.diagnostics.report import AnalysisReport, Summary, format_order
from autbasis.exceptions import AutbasisError, InconsistentResultError

from conftest import BruteForceOracle, ConstantOracle, sample


class TestChecker:
    """Exact analysis plus cross-checks on one automaton."""

    def test_end_to_end_positive(self):
        report = check_encoding(2, "0111", "1")
        assert report.source == "2_0111_1"
        assert report.growth.is_exponential
        assert report.heuristic_polynomial is False
        assert report.candidates == [1]
        assert report.gcd == 1
        assert report.heuristic_gcd == 1
        assert report.gcd_agrees
        assert report.accepts_one
        assert report.is_additive_basis

    def test_polynomial_unit_gcd(self):
        report = check_automaton(sample("powers_of_two"))
        assert report.is_polynomial
        assert report.has_unit_gcd
        assert not report.is_additive_basis

    def test_gcd_needs_oracle(self):
        report = check_automaton(sample("even"))
        assert report.candidates == [2, 1]
        assert report.gcd is None
        assert report.gcd_agrees is None
        assert report.heuristic_gcd == 2

    def test_gcd_from_oracle(self, oracle):
        report = check_automaton(sample("multiples_of_three"), oracle=oracle)
        assert report.gcd == 3
        assert report.gcd_agrees
        assert [q.argument for q in oracle.queries] == [3]

    def test_no_nonzero_value(self):
        report = check_encoding(2, "0111", "0")
        assert report.candidates is None
        assert report.gcd is None
        assert report.heuristic_gcd == 0

    def test_without_cross_check(self):
        report = check_automaton(sample("positive"), Config(cross_check=False))
        assert report.heuristic_polynomial is None
        assert report.heuristic_gcd is None

    def test_growth_disagreement_raises(self, monkeypatch):
        monkeypatch.setattr(
            "autbasis.checker.heuristic_is_polynomial", lambda aut, length: False
        )
        with pytest.raises(InconsistentResultError, match="word length 62"):
            check_automaton(sample("powers_of_two"))

    def test_five_state_polynomial_chain(self):
        # 0*1+0+1+ with a dead sink
        aut = Automaton.from_encoding(5, [0, 1, 2, 1, 2, 3, 4, 3, 4, 4], [3])
        report = check_automaton(aut)
        assert report.is_polynomial
        assert report.heuristic_polynomial is True

    def test_five_state_chain_in_batch(self):
        out = io.StringIO()
        lines = io.StringIO("5 0121234344 3\n2 0111 1\n")
        status = cli.run(lines, AdditiveBasisChecker(Config()), quiet=True, out=out)
        assert status == 0
        summary = out.getvalue().splitlines()
        assert "Exponential growth and GCD==1: 1" in summary
        # smallest value is 5 and no prover is configured
        assert "Undetermined GCD: 1" in summary

    def test_gcd_disagreement_warns(self, oracle, caplog):
        config = Config(heuristic_gcd_bits=1)
        with caplog.at_level(logging.WARNING, logger="autbasis.checker"):
            report = check_automaton(sample("three_powers_of_two"), config, oracle)
        assert report.gcd == 3
        assert report.heuristic_gcd == 0
        assert report.gcd_agrees is False
        assert "heuristic says 0" in caplog.text

    def test_gcd_disagreement_strict(self, oracle):
        config = Config(heuristic_gcd_bits=1, strict_gcd=True)
        with pytest.raises(InconsistentResultError):
            check_automaton(sample("three_powers_of_two"), config, oracle)

    def test_orders(self, oracle):
        config = Config(compute_order=True, compute_plain_order=True)
        report = check_automaton(sample("odd"), config, oracle)
        assert report.asymptotic_order == 2
        assert report.order == 2

    def test_orders_only_for_exponential_unit_gcd(self, oracle):
        config = Config(compute_order=True)
        report = check_automaton(sample("powers_of_two"), config, oracle)
        assert report.asymptotic_order is None

    def test_orders_need_oracle(self):
        report = check_automaton(sample("odd"), Config(compute_order=True))
        assert report.asymptotic_order is None

    def test_max_order(self):
        config = Config(compute_order=True, max_order=2)
        report = AdditiveBasisChecker(config, ConstantOracle(False)).check(sample("positive"))
        assert math.isinf(report.asymptotic_order)


class TestConfig:
    """Configuration validation."""

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"heuristic_growth_word_length": 0},
            {"heuristic_gcd_bits": 0},
            {"max_order": 0},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            Config(**kwargs)

    def test_presets(self):
        assert Config.default().heuristic_growth_word_length == 62
        assert Config.quick().heuristic_gcd_bits < Config.default().heuristic_gcd_bits


class TestSummary:
    """Batch aggregation."""

    def test_buckets(self):
        summary = Summary()
        for name in ["positive", "powers_of_two", "even", "odd"]:
            summary.add(check_automaton(sample(name)))
        assert summary.exponential_unit_gcd == 2
        assert summary.polynomial_unit_gcd == 1
        assert summary.undetermined_gcd == 1
        assert summary.additive_bases == 2
        assert summary.total == 4

    def test_render_orders(self):
        summary = Summary(max_order=3)
        report = AnalysisReport("x", check_automaton(sample("odd")).growth, gcd=1)
        report.asymptotic_order = math.inf
        summary.add(report)
        lines = summary.render()
        assert lines[0] == "Polynomial growth and GCD!=1: 0"
        assert "1 automata with asymptotic additive basis order greater than 3" in lines

    def test_format_order(self):
        assert format_order(2) == "2"
        assert format_order(math.inf, 5) == "greater than 5"


class TestCommandLine:
    """Batch input on stdin or a file."""

    INPUT = "\n".join(
        [
            "# comment",
            "2 0111 1",
            "3 011222 1",
            "",
            "2 0101 0",
            "2 1011 1",
        ]
    )

    def test_run(self):
        out = io.StringIO()
        checker = AdditiveBasisChecker(Config())
        status = cli.run(io.StringIO(self.INPUT), checker, quiet=False, out=out)
        assert status == 0
        assert out.getvalue().splitlines() == [
            "2 0111 1",
            "Polynomial growth and GCD!=1: 0",
            "Polynomial growth and GCD==1: 1",
            "Exponential growth and GCD!=1: 0",
            "Exponential growth and GCD==1: 1",
            "Undetermined GCD: 1",
            "Form additive basis: 1",
        ]

    def test_quiet_with_orders(self):
        out = io.StringIO()
        checker = AdditiveBasisChecker(Config(compute_order=True), BruteForceOracle())
        cli.run(io.StringIO("2 0101 1\n"), checker, quiet=False, out=out)
        lines = out.getvalue().splitlines()
        assert lines[:2] == [
            "2 0101 1",
            " forms an additive basis and has asymptotic additive basis order 2",
        ]

        out = io.StringIO()
        cli.run(io.StringIO("2 0101 1\n"), checker, quiet=True, out=out)
        assert out.getvalue().splitlines()[0].startswith("Polynomial growth")

    def test_malformed_line(self, capsys):
        out = io.StringIO()
        checker = AdditiveBasisChecker(Config())
        status = cli.run(io.StringIO("2 011 1\n2 0111 1\n"), checker, quiet=True, out=out)
        assert status == 1
        assert "line 1" in capsys.readouterr().err
        assert "Exponential growth and GCD==1: 1" in out.getvalue()

    def test_inconsistency_stops(self, monkeypatch, capsys):
        monkeypatch.setattr(
            "autbasis.checker.heuristic_is_polynomial", lambda aut, length: False
        )
        analyzer = AdditiveBasisChecker(Config())
        status = cli.run(io.StringIO("3 011222 1\n"), analyzer, quiet=True, out=io.StringIO())
        assert status == 2
        assert "says otherwise" in capsys.readouterr().err

    @pytest.mark.parametrize("line", ["1", "x 01 0", "2 0111 1 extra"])
    def test_parse_line_errors(self, line):
        with pytest.raises(AutbasisError):
            cli.parse_line(line)

    def test_main_with_file(self, tmp_path, capsys):
        path = tmp_path / "automata.txt"
        path.write_text(self.INPUT + "\n")
        status = cli.main([str(path), "--gcd-bits", "8", "--growth-length", "40"])
        assert status == 0
        output = capsys.readouterr().out
        assert output.startswith("2 0111 1\n")
        assert "Form additive basis: 1" in output

    def test_config_from_args(self):
        args = cli.build_parser().parse_args(["-O", "4", "-l", "--strict-gcd"])
        config = cli.config_from_args(args)
        assert config.compute_order
        assert config.compute_plain_order
        assert config.max_order == 4
        assert config.keep_logs
        assert config.strict_gcd

    def test_order_without_max(self):
        args = cli.build_parser().parse_args(["-o"])
        config = cli.config_from_args(args)
        assert config.compute_order
        assert not config.compute_plain_order
        assert config.max_order is None

    def test_order_flag_before_input(self, tmp_path):
        path = tmp_path / "automata.txt"
        path.write_text("2 0101 1\n")
        parser = cli.build_parser()
        args = cli.parse_args(parser, ["-o", str(path)])
        assert args.input.name == str(path)
        args.input.close()
        config = cli.config_from_args(args)
        assert config.compute_order
        assert config.max_order is None

    def test_order_bound_before_input(self, tmp_path):
        path = tmp_path / "automata.txt"
        path.write_text("2 0101 1\n")
        args = cli.parse_args(cli.build_parser(), ["-O", "3", str(path)])
        assert args.input.name == str(path)
        args.input.close()
        assert cli.config_from_args(args).max_order == 3

    def test_main_order_flag_before_input(self, tmp_path, capsys):
        path = tmp_path / "automata.txt"
        path.write_text("2 0111 1\n")
        assert cli.main(["-o", str(path)]) == 0
        assert "Exponential growth and GCD==1: 1" in capsys.readouterr().out

    def test_order_flag_with_missing_file(self, tmp_path):
        with pytest.raises(SystemExit):
            cli.parse_args(cli.build_parser(), ["-o", str(tmp_path / "missing.txt")])
