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

from tabletext.config.settings import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Every test starts from default settings, free of TABLETEXT_* env vars."""
    for name in list(os.environ):
        if name.startswith('TABLETEXT_'):
            monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def thead_table_html():
    """Table with a <thead> header row and two body rows."""
    return """
        <table>
          <thead>
            <tr>
              <th>number   </th>
              <th>  my text</th>
            </tr>
          </thead>
          <tbody>
            <tr>
              <td>111   </td>
              <td>aaa</td>
            </tr>
            <tr>
              <td>222</td>
              <td>   bbb</td>
            </tr>
          </tbody>
        </table>
    """


@pytest.fixture
def first_row_table_html():
    """Table whose first <tr> holds the labels, with icon markup in a label."""
    return """
        <table>
          <tr>
            <td>number  <i class="icon">!</i>   abc </td>
            <td>  my text</td>
          </tr>
          <tr>
            <td>777   </td>
            <td>ggg</td>
          </tr>
          <tr>
            <td>888</td>
            <td>   hhh</td>
          </tr>
        </table>
    """


@pytest.fixture
def complicated_table_html():
    """Table with a column that needs a custom parser."""
    return """
        <table>
          <thead>
            <tr>
              <th>number   </th>
              <th> complicated  stuff</th>
              <th>  my text</th>
              <th>some other stuff</th>
            </tr>
          </thead>
          <tbody>
            <tr>
              <td>111   </td>
              <td> aaa<span class="stuff">123ddd</span> bb</td>
              <td>aaa</td>
              <td>ccc</td>
            </tr>
            <tr>
              <td>222</td>
              <td>cc567<span class="stuff">890eee11</span></td>
              <td>   bbb</td>
              <td>ddd</td>
            </tr>
          </tbody>
        </table>
    """


@pytest.fixture
def vertical_table_html():
    """Label cell / value cell per row."""
    return """
        <table>
          <tr><td>number   </td><td> 333 </td></tr>
          <tr><td> product <i class="something"></i> name</td><td>cc c</td></tr>
          <tr><td>unknown label</td><td>zzz</td></tr>
          <tr><td>   </td><td>blank label</td></tr>
        </table>
    """
