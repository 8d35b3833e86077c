"""Tests for the public spreadsheet import."""

import httpx
import pandas as pd
import pytest

from daily_stock_update.config import SURVEY_SHEET_URL
from daily_stock_update.data import sheet_import
from daily_stock_update.data.sheet_import import import_sheet, main, sheet_csv_url

SHEET_ID = "16o68CSXpNWzVVk-rvfjQF20He_2UqopOcxshFo74S4U"

CSV_BODY = "name,favourite_ticker,score\nAda,AAPL,5\nGrace,MSFT,4\n"


class TestSheetCsvUrl:

    def test_share_url(self):
        assert sheet_csv_url(SURVEY_SHEET_URL) == (
            f"https://docs.google.com/spreadsheets/d/{SHEET_ID}/export?format=csv"
        )

    def test_keeps_gid(self):
        url = f"https://docs.google.com/spreadsheets/d/{SHEET_ID}/edit#gid=123"
        assert sheet_csv_url(url).endswith("export?format=csv&gid=123")

    @pytest.mark.parametrize(
        "url",
        ["https://example.com/spreadsheets/d/abc/edit", "https://docs.google.com/document/d/abc"],
    )
    def test_rejects_other_urls(self, url):
        with pytest.raises(ValueError):
            sheet_csv_url(url)


class TestImportSheet:

    def test_writes_csv(self, settings, tmp_path):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, text=CSV_BODY)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        output = tmp_path / "data" / "survey_data.csv"

        path = import_sheet(SURVEY_SHEET_URL, output, client=client, settings=settings)

        assert path == output
        df = pd.read_csv(path)
        assert list(df.columns) == ["name", "favourite_ticker", "score"]
        assert df["score"].tolist() == [5, 4]
        assert seen[0].url.params["format"] == "csv"

    def test_http_error(self, settings, tmp_path):
        client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(404)))

        with pytest.raises(httpx.HTTPStatusError):
            import_sheet(SURVEY_SHEET_URL, tmp_path / "out.csv", client=client, settings=settings)

        assert not (tmp_path / "out.csv").exists()

    def test_defaults_to_configured_url(self, settings, tmp_path):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, text=CSV_BODY)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        import_sheet(output_path=tmp_path / "out.csv", client=client, settings=settings)

        assert SHEET_ID in str(seen[0].url)

    def test_empty_sheet(self, settings, tmp_path):
        client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200, text="")))

        with pytest.raises(pd.errors.EmptyDataError):
            import_sheet(SURVEY_SHEET_URL, tmp_path / "out.csv", client=client, settings=settings)

        assert not (tmp_path / "out.csv").exists()


# ============================================================================
# CLI
# ============================================================================

class TestMain:

    def _run(self, monkeypatch, error):
        def failing_import(url, output):
            raise error

        monkeypatch.setattr(sheet_import, "import_sheet", failing_import)
        monkeypatch.setattr("sys.argv", ["import-survey-data"])

        with pytest.raises(SystemExit) as exc_info:
            main()
        return exc_info.value.code

    def test_empty_sheet_message(self, monkeypatch, capsys):
        code = self._run(monkeypatch, pd.errors.EmptyDataError("No columns to parse from file"))

        assert code == 1
        out = capsys.readouterr().out
        assert "Sheet is empty" in out
        assert "Configuration error" not in out

    def test_bad_url_message(self, monkeypatch, capsys):
        code = self._run(monkeypatch, ValueError("Not a Google Sheets URL: x"))

        assert code == 1
        assert "Configuration error" in capsys.readouterr().out
