import json
import tempfile
import unittest
from pathlib import Path

from typer.testing import CliRunner

from datagen import generate as generate_module
from datagen.cli import app
from datagen.identity import Identity
from datagen.plugin_registry import registry
from datagen.regions import Region, format_address, format_phone


class StubProvider:
    def identity(self, region: Region, seed: int) -> Identity:
        return Identity(
            identifier=f"id-{seed}",
            name="Jane Mary Doe",
            address=format_address(region, "Main St", "Springfield", "IL", "62704"),
            phone=format_phone(region, ["555", "010", "0000"]),
        )


class CLITests(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()
        self.tempdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tempdir.cleanup)
        registry.register_provider("stub", StubProvider)
        self.addCleanup(registry.providers.pop, "stub", None)
        self.root = Path(self.tempdir.name)

    def test_generate_csv(self) -> None:
        output = self.root / "data.csv"
        result = self.runner.invoke(
            app,
            ["generate", "--provider", "stub", "--region", "usa", "--count", "5", "--output", str(output)],
        )
        self.assertEqual(result.exit_code, 0, result.output)
        lines = output.read_text(encoding="utf-8").splitlines()
        self.assertEqual(lines[0], "index,identifier,name,address,phone")
        self.assertEqual(len(lines), 6)
        self.assertTrue(lines[1].startswith("1,id-"))

    def test_generate_page_jsonl(self) -> None:
        output = self.root / "page.out"
        result = self.runner.invoke(
            app,
            ["generate", "--provider", "stub", "--page", "2", "--errors", "1.5", "-o", str(output), "-f", "jsonl"],
        )
        self.assertEqual(result.exit_code, 0, result.output)
        indices = [json.loads(line)["index"] for line in output.read_text(encoding="utf-8").splitlines()]
        self.assertEqual(indices, list(range(21, 31)))

    def test_generate_with_config_file(self) -> None:
        config = self.root / "run.yaml"
        config.write_text("region: Germany\ncount: 3\nprovider: stub\n", encoding="utf-8")
        output = self.root / "de.jsonl"
        result = self.runner.invoke(app, ["generate", "--config", str(config), "--count", "2", "-o", str(output)])
        self.assertEqual(result.exit_code, 0, result.output)
        rows = [json.loads(line) for line in output.read_text(encoding="utf-8").splitlines()]
        self.assertEqual(len(rows), 2)
        self.assertTrue(rows[0]["phone"].startswith("+49-"))

    def test_generate_prints_table(self) -> None:
        result = self.runner.invoke(app, ["generate", "--provider", "stub", "--count", "2"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Generated Data", result.output)

    def test_rejects_bad_arguments(self) -> None:
        for args in (
            ["generate", "--provider", "stub", "--region", "France"],
            ["generate", "--provider", "stub", "--errors=-1"],
            ["generate", "--provider", "missing"],
            ["generate", "--provider", "stub", "--page", "0"],
            ["generate", "--provider", "stub", "-o", str(self.root / "x.xlsx")],
            ["generate", "--provider", "stub", "--count", "-1"],
            ["generate", "--provider", "stub", "--start", "0"],
            ["generate", "--provider", "stub", "--workers", "0"],
            ["audit", "--provider", "stub", "--count=-5"],
        ):
            with self.subTest(args=args):
                result = self.runner.invoke(app, args)
                self.assertEqual(result.exit_code, 2, result.output)

    def test_audit_and_report(self) -> None:
        audit_path = self.root / "audit.json"
        result = self.runner.invoke(
            app,
            ["audit", "--provider", "stub", "--errors", "2", "--count", "10", "--seed", "7", "-o", str(audit_path)],
        )
        self.assertEqual(result.exit_code, 0, result.output)
        audit = json.loads(audit_path.read_text(encoding="utf-8"))
        self.assertEqual(audit["summary"]["records_compared"], 10)
        self.assertEqual(audit["violations"], [])
        self.assertEqual(audit["run"]["seed"], 7)
        self.assertGreater(audit["summary"]["mean_edit_distance"], 0)

        html_path = self.root / "report.html"
        result = self.runner.invoke(app, ["report", str(audit_path), "-o", str(html_path)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Corruption audit", html_path.read_text(encoding="utf-8"))

    def test_text_seed_is_kept_verbatim(self) -> None:
        for seed in ("042", "+42", "run-a"):
            with self.subTest(seed=seed):
                output = self.root / "seeded.jsonl"
                result = self.runner.invoke(
                    app,
                    ["generate", "--provider", "stub", "--seed", seed, "--count", "2", "--errors", "3", "-o", str(output)],
                )
                self.assertEqual(result.exit_code, 0, result.output)
                rows = [json.loads(line) for line in output.read_text(encoding="utf-8").splitlines()]
                expected = [
                    generate_module.synthesize_record(index, Region.USA, 3, seed, StubProvider()).as_dict()
                    for index in (1, 2)
                ]
                self.assertEqual(rows, expected)

    def test_canonical_integer_seed_matches_library(self) -> None:
        output = self.root / "int.jsonl"
        result = self.runner.invoke(
            app, ["generate", "--provider", "stub", "--seed", "42", "--count", "1", "--errors", "2", "-o", str(output)]
        )
        self.assertEqual(result.exit_code, 0, result.output)
        row = json.loads(output.read_text(encoding="utf-8").splitlines()[0])
        self.assertEqual(row, generate_module.synthesize_record(1, Region.USA, 2, 42, StubProvider()).as_dict())

    def test_seed_command(self) -> None:
        result = self.runner.invoke(app, ["seed"])
        self.assertEqual(result.exit_code, 0, result.output)
        value = int(result.output.strip())
        self.assertTrue(0 <= value < 1_000_000_000)


if __name__ == "__main__":
    unittest.main()
