import sys
import os
import pytest
# Ensure the project root is on sys.path for all tests
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))


@pytest.fixture(autouse=True)
def quiet_env(monkeypatch):
    """Keep LUDWIEG_VERBOSE from the outer environment out of the tests."""
    monkeypatch.delenv('LUDWIEG_VERBOSE', raising=False)


@pytest.fixture
def sample_schema():
    return '''// Sample schema
package user_info {
    id 0x01
    string name
    uint8 age
    @address[*] addresses
    bool active !deprecated

    struct address {
        // where the user lives
        string street
        uint32 number
        struct geo {
            double lat
            double lon
        }
    }
}

package ping {
    id 0x02
    uint64 timestamp
}
'''
