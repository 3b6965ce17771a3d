"""Tests for the command line interface."""
import json
import logging

import pytest
from click.testing import CliRunner

from ..cli.main import cli
from ..config import Config

@pytest.fixture
def runner():
    return CliRunner()

@pytest.fixture
def invoke(runner, session_manager, clean_env):
    """Run the CLI against the in-memory database."""
    config_file = clean_env / 'database_config.json'
    root_logger = logging.getLogger()
    saved_handlers, saved_level = root_logger.handlers[:], root_logger.level

    def _invoke(*args, **kwargs):
        obj = {
            'config': Config(database_url='sqlite://', auth_token='token'),
            'session_manager': session_manager,
            'config_file': config_file,
        }
        return runner.invoke(cli, list(args), obj=obj, catch_exceptions=False, **kwargs)

    yield _invoke

    # The CLI replaces the root handlers with one bound to the runner's stderr
    root_logger.handlers[:] = saved_handlers
    root_logger.setLevel(saved_level)

def test_products_commands(invoke):
    """Test adding, listing and deactivating products."""
    result = invoke('products', 'add', 'Carrot Cake', '7.50')
    assert result.exit_code == 0
    assert 'Product added: 1 Carrot Cake R7.50' in result.output

    result = invoke('products', 'list')
    assert result.exit_code == 0
    assert 'Carrot Cake' in result.output
    assert 'R7.50' in result.output

    result = invoke('products', 'deactivate', '1', '--yes')
    assert result.exit_code == 0

    result = invoke('products', 'list')
    assert 'No products found' in result.output

    result = invoke('products', 'list', '--all')
    assert 'Carrot Cake' in result.output

def test_invalid_price_aborts(invoke):
    result = invoke('products', 'add', 'Carrot Cake', 'cheap')
    assert result.exit_code == 1
    assert 'Invalid price' in result.output

def test_reps_commands(invoke):
    assert invoke('reps', 'add', 'Thandi').exit_code == 0
    assert invoke('reps', 'rename', '1', 'Thandiwe').exit_code == 0

    result = invoke('reps', 'list')
    assert 'Thandiwe' in result.output

def test_order_commands(invoke):
    """Test an order through add, edit, complete and reopen."""
    invoke('products', 'add', 'Carrot Cake', '7.50')
    invoke('products', 'add', 'Brownies', '12')
    invoke('reps', 'add', 'Thandi')

    result = invoke(
        'orders', 'add',
        '--client', 'Alice',
        '--contact', '082 555 0101',
        '--due', '2024-05-10',
        '--rep', '1',
        '--item', '1:2',
        '--item', '2:1',
    )
    assert result.exit_code == 0
    assert 'Order 1 saved, total R27.00' in result.output

    result = invoke('orders', 'list')
    assert '1 open orders' in result.output
    assert '2 x Carrot Cake, 1 x Brownies' in result.output

    result = invoke('orders', 'edit', '1', '--item', '2:2', '--comment', 'No nuts')
    assert result.exit_code == 0
    assert 'total R24.00' in result.output

    result = invoke('orders', 'show', '1')
    assert 'No nuts' in result.output
    assert 'Carrot Cake' not in result.output
    assert 'Thandi' in result.output

    assert invoke('orders', 'complete', '1').exit_code == 0
    assert 'No open orders' in invoke('orders', 'list').output

    assert invoke('orders', 'reopen', '1').exit_code == 0
    assert '1 open orders' in invoke('orders', 'list').output

def test_order_errors(invoke):
    invoke('products', 'add', 'Carrot Cake', '7.50')

    result = invoke('orders', 'add', '--client', 'Alice', '--due', 'soon', '--item', '1:1')
    assert result.exit_code == 1
    assert 'Invalid due date' in result.output

    result = invoke('orders', 'add', '--client', 'Alice', '--due', '2024-05-10', '--item', '1')
    assert result.exit_code == 1
    assert 'PRODUCT_ID:QUANTITY' in result.output

    result = invoke('orders', 'complete', '42')
    assert result.exit_code == 1
    assert 'Order 42 not found' in result.output

def test_export_command(invoke, tmp_path):
    invoke('products', 'add', 'Carrot Cake', '7.50')
    invoke('orders', 'add', '--client', 'Alice', '--due', '2024-05-10', '--item', '1:1')

    result = invoke('export', str(tmp_path / 'history'))
    assert result.exit_code == 0
    assert 'exported successfully' in result.output
    assert (tmp_path / 'history.xlsx').exists()

def test_configure_and_show_config(invoke, clean_env):
    """Test the connection details are saved and shown masked."""
    result = invoke('configure', '--url', 'libsql://bakery.turso.io', '--token', 'secret-token-1234')
    assert result.exit_code == 0

    saved = json.loads((clean_env / 'database_config.json').read_text())
    assert saved == {'database_url': 'libsql://bakery.turso.io', 'auth_token': 'secret-token-1234'}

    result = invoke('show-config')
    assert result.exit_code == 0
    assert 'libsql://bakery.turso.io' in result.output
    assert '1234' in result.output
    assert 'secret-token' not in result.output
    assert 'Configuration is complete' in result.output

def test_test_connection(invoke):
    result = invoke('test-connection')
    assert result.exit_code == 0
    assert 'Successfully connected' in result.output

def test_edit_order_clears_representative(invoke):
    """Test --no-rep removes the representative and clashes with --rep."""
    invoke('products', 'add', 'Carrot Cake', '7.50')
    invoke('reps', 'add', 'Thandi')
    invoke('orders', 'add', '--client', 'Alice', '--due', '2024-05-10', '--rep', '1', '--item', '1:1')

    result = invoke('orders', 'edit', '1', '--no-rep')
    assert result.exit_code == 0
    assert 'Representative: -' in result.output

    result = invoke('orders', 'edit', '1', '--rep', '1', '--no-rep')
    assert result.exit_code == 2
    assert 'cannot be used together' in result.output
