import matplotlib
import pytest

matplotlib.use("Agg")


TOTALS_PAGE = """
<html>
  <body>
    <h1>2023-24 NBA Player Stats: Totals</h1>
    <table id="totals_stats" class="sortable stats_table">
      <thead>
        <tr class="over_header"><th colspan="3"></th><th colspan="3">Season</th></tr>
        <tr><th>Rk</th><th>Player</th><th>Age</th><th>Team</th><th>G</th><th>MP</th></tr>
      </thead>
      <tbody>
        <tr><th>1</th><td>Young Gun</td><td>20</td><td>AAA</td><td>70</td><td>2000</td></tr>
        <tr><th>2</th><td>Old Hand</td><td>34</td><td>AAA</td><td>60</td><td>500</td></tr>
        <tr><th>3</th><td>Traded Guy</td><td>27</td><td>2TM</td><td>50</td><td>1500</td></tr>
        <tr class="thead"><th>Rk</th><th>Player</th><th>Age</th><th>Team</th><th>G</th><th>MP</th></tr>
        <tr><th>3</th><td>Traded Guy</td><td>27</td><td>AAA</td><td>20</td><td>500</td></tr>
        <tr><th>3</th><td>Traded Guy</td><td>27</td><td>BBB</td><td>30</td><td>1000</td></tr>
        <tr><th>4</th><td>Steady Vet</td><td>30</td><td>BBB</td><td>80</td><td>2500</td></tr>
      </tbody>
    </table>
  </body>
</html>
"""


@pytest.fixture
def totals_page() -> str:
    return TOTALS_PAGE


@pytest.fixture
def totals_file(tmp_path):
    path = tmp_path / "NBA_2024_totals.html"
    path.write_text(TOTALS_PAGE, encoding="utf-8")
    return path
