"""Tests for batch processing."""
import json

import pytest

from comps_extractor.batch_runner import run_batch, write_manifest


@pytest.fixture
def documents(write_document, primary_row, tmp_path):
    first = write_document([[primary_row]], name="a.json")
    second = write_document([[primary_row]], name="b.json")
    return [first, second]


class TestRunBatch:
    """Test batch runs and manifests."""

    def test_processes_every_file(self, documents, tmp_path):
        calls = []

        summary = run_batch(
            documents,
            tmp_path / "out",
            format="csv",
            progress_callback=lambda idx, total, name: calls.append((idx, total, name)),
        )

        assert summary.totals["successes"] == 2
        assert summary.totals["records"] == 2
        assert (tmp_path / "out" / "a.csv").exists()
        assert calls == [(1, 2, "a.json"), (2, 2, "b.json")]

    def test_skip_existing(self, documents, tmp_path):
        run_batch(documents, tmp_path / "out", format="json")

        summary = run_batch(documents, tmp_path / "out", format="json", skip_existing=True)

        assert summary.totals["skipped"] == 2
        assert all(r.skipped for r in summary.results)

    def test_failure_recorded(self, documents, tmp_path):
        broken = tmp_path / "broken.json"
        broken.write_text("{oops", encoding="utf-8")

        summary = run_batch(documents + [broken], tmp_path / "out", format="json")

        assert summary.totals["failures"] == 1
        assert summary.results[-1].success is False
        assert summary.results[-1].error

    def test_json_payloads_and_manifest(self, documents, tmp_path):
        summary = run_batch(documents, tmp_path / "out", format="xlsx", json_output_dir=tmp_path / "json")
        manifest = tmp_path / "out" / "batch_summary.json"

        write_manifest(summary, manifest)

        data = json.loads(manifest.read_text(encoding="utf-8"))
        assert data["totals"]["processed"] == 2
        assert (tmp_path / "json" / "a.json").exists()

    def test_unsupported_format(self, documents, tmp_path):
        with pytest.raises(ValueError):
            run_batch(documents, tmp_path / "out", format="docx")

    def test_totals_count_derived_price_per_sf(self, write_document, make_row, primary_cells, tmp_path):
        row = make_row([cell for cell in primary_cells if cell[0] != "981"])
        path = write_document([[row]], name="derived.json")

        summary = run_batch([path], tmp_path / "out", format="json")

        assert summary.results[0].derived_price_per_sf == 1
        assert summary.totals["derived_price_per_sf"] == 1
        assert summary.to_manifest()["results"][0]["records"] == 1
