"""Shared fixtures for header-audit tests."""

import pytest
from click.testing import CliRunner

APACHE_HEADER = """\
Licensed to the Apache Software Foundation (ASF) under one
or more contributor license agreements.  See the NOTICE file
distributed with this work for additional information
regarding copyright ownership.  The ASF licenses this file
to you under the Apache License, Version 2.0 (the
"License"); you may not use this file except in compliance
with the License.  You may obtain a copy of the License at

  http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing,
software distributed under the License is distributed on an
"AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY
KIND, either express or implied.  See the License for the
specific language governing permissions and limitations
under the License.
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def apache_header() -> str:
    """Apache license header commented out as a shell script would."""
    return "\n".join(
        f"# {line}" if line else "#" for line in APACHE_HEADER.splitlines()
    ) + "\n"


@pytest.fixture
def mit_snippet() -> str:
    """A short MIT phrase not recognized by the default matcher."""
    return "// Permission is hereby granted, free of charge, to any person obtaining a copy\n"
