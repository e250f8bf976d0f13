# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest


# curl_cffi's AsyncSession is bound to asyncio
@pytest.fixture
def anyio_backend():
    return "asyncio"
