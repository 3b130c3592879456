import runpy
from unittest.mock import patch

import pytest


class TestModuleEntryPoint:
    @patch("pgrecgen.db_codegen.main.main")
    def test_runs_cli_main(self, mock_main):
        mock_main.return_value = None

        with pytest.raises(SystemExit) as exc_info:
            runpy.run_module("pgrecgen", run_name="__main__")

        mock_main.assert_called_once_with()
        assert exc_info.value.code is None

    @patch("pgrecgen.db_codegen.main.main")
    def test_propagates_error_exit(self, mock_main):
        mock_main.side_effect = SystemExit("Error: boom")

        with pytest.raises(SystemExit) as exc_info:
            runpy.run_module("pgrecgen", run_name="__main__")

        assert exc_info.value.code == "Error: boom"
