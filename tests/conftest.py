"""
Pytest configuration and shared fixtures.
"""
import os
import sys

import pytest

# Add project root to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from emlkit.config import reset_settings


NESTED_MULTIPART_EML = """\
From: "Shop News" <news@mail.shop.example.com>
To: customer@example.org
Subject: Weekly deals
Date: Mon, 6 Jan 2025 10:00:00 +0000
Message-ID: <abc123@mail.shop.example.com>
MIME-Version: 1.0
Content-Type: multipart/mixed; boundary="outer-boundary"

This is a multi-part message in MIME format.

--outer-boundary
Content-Type: multipart/alternative;
 boundary="inner-boundary"

--inner-boundary
Content-Type: text/plain; charset="iso-8859-1"
Content-Transfer-Encoding: quoted-printable

Caf=E9 deals this week=
 only.

--inner-boundary
Content-Type: text/html; charset="utf-8"
Content-Transfer-Encoding: 7bit

<html><body><p>Caf&eacute; deals</p></body></html>

--inner-boundary--

--outer-boundary
Content-Type: text/plain; name="terms.txt"
Content-Disposition: attachment; filename="terms.txt"

ATTACHMENT TERMS TEXT
--outer-boundary--
Epilogue text
"""


TRACKED_HEADERS_EML = """\
Delivered-To: someone@example.org
Received: by 2002:a05:6a10:1234 with SMTP id abc;
        Mon, 6 Jan 2025 10:00:01 -0800 (PST)
Received: from mail.shop.example.com (mail.shop.example.com. [192.0.2.1])
        by mx.example.org with ESMTPS id xyz
DKIM-Signature: v=1; a=rsa-sha256; d=shop.example.com;
        b=AAAABBBBCCCC
Received-SPF: pass (example.org: domain of news@shop.example.com)
X-Mailer: ShopMailer 2.0
X-Campaign-Id: 77
 continued-value
From: "Jane Doe" <jane@shop.example.com>
To: customer@example.org
Cc: other@example.org
Subject: Weekly deals
Date: Mon, 6 Jan 2025 10:00:00 +0000
Message-Id: <abc123@mail.example.com>
List-Unsubscribe: <mailto:unsub@shop.example.com>
MIME-Version: 1.0
Content-Type: text/plain; charset="utf-8"

Hello there.
X-Not-A-Header: body line stays
"""


@pytest.fixture
def nested_multipart_eml():
    """multipart/mixed holding multipart/alternative (QP text + html) and an attachment."""
    return NESTED_MULTIPART_EML


@pytest.fixture
def tracked_headers_eml():
    """Single-part message carrying trace, auth and X- headers."""
    return TRACKED_HEADERS_EML


@pytest.fixture(autouse=True)
def fresh_settings():
    """Each test sees settings built from its own environment."""
    reset_settings()
    yield
    reset_settings()
