from unittest.mock import Mock

import pytest
import requests


def make_response(status_code=200, text="", json_data=None):
    resp = Mock(spec=requests.Response)
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 400
    resp.text = text
    resp.json.return_value = json_data
    if resp.ok:
        resp.raise_for_status.return_value = None
    else:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    return resp


@pytest.fixture
def session():
    return Mock(spec=requests.Session)
