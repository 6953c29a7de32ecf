
import sys
import os

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import pandas as pd
import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import main
from normalize_voting_systems import count_voting_systems, normalize_voting_systems


SYSTEMS = pd.DataFrame({
    'country_territory': ['Albania', 'Andorra', 'Antarctica', 'Australia'],
    'answers': ['a. List PR', 'a. Parallel. b. List PR', '', 'a. Alternative V. b. STV'],
})


def test_load_av_dataset(tmp_path):
    path = tmp_path / 'AV_database.dta'
    pd.DataFrame({
        'city': ['Berkeley', 'Stockton', 'Anaheim'],
        'treated': [1, 0, 0],
        'post': [1, 1, 0],
    }).to_stata(path, write_index=False)
    av = main.load_av_dataset(str(path))
    assert len(av) == 3
    assert av['city'].tolist() == ['Berkeley', 'Stockton', 'Anaheim']


def test_load_av_dataset_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        main.load_av_dataset(str(tmp_path / 'missing.dta'))


def test_summarize_voting_systems():
    normalized = normalize_voting_systems(SYSTEMS)
    summary = main.summarize_voting_systems(normalized, count_voting_systems(normalized))
    assert summary.startswith('5 voting systems were recorded across 3 countries/territories')
    assert 'List PR (2 countries/territories)' in summary


def test_summarize_voting_systems_empty():
    normalized = normalize_voting_systems(SYSTEMS.iloc[2:3])
    summary = main.summarize_voting_systems(normalized, count_voting_systems(normalized))
    assert summary == 'No voting systems were found across 0 countries/territories.'


def test_generate_plot(tmp_path):
    normalized = normalize_voting_systems(SYSTEMS)
    output_file = tmp_path / 'Viz' / 'Number of Electoral Systems.jpg'
    main.generate_plot(count_voting_systems(normalized), 3, str(output_file))
    assert output_file.exists()
    assert output_file.stat().st_size > 0


def test_generate_plot_overwrites(tmp_path):
    normalized = normalize_voting_systems(SYSTEMS)
    output_file = tmp_path / 'chart.png'
    output_file.write_bytes(b'old')
    main.generate_plot(count_voting_systems(normalized), 3, str(output_file))
    assert output_file.read_bytes() != b'old'


def test_build_plot():
    normalized = normalize_voting_systems(SYSTEMS)
    counts = count_voting_systems(normalized)
    fig = main.build_plot(counts, 3)
    ax = fig.axes[0]
    try:
        # Bars from top to bottom follow the counts, most frequent first.
        bars = sorted(ax.patches, key=lambda bar: bar.get_y(), reverse=True)
        assert [bar.get_width() for bar in bars] == counts['count'].tolist()
        assert bars[0].get_width() == 2

        assert len(ax.get_yticks()) == 0
        assert ax.get_yticklabels() == []

        assert fig._suptitle.get_text() == 'Number of Electoral Systems'
        assert ax.get_title(loc='left') == 'Data is broken out across 3 countries/territories,'
        assert any('ACE Project' in text.get_text() for text in fig.texts)
    finally:
        plt.close(fig)


def test_workflow_script_not_installed():
    tomllib = pytest.importorskip('tomllib')
    with open(os.path.join(os.path.dirname(__file__), '..', 'pyproject.toml'), 'rb') as infile:
        config = tomllib.load(infile)
    assert 'main' not in config['tool']['setuptools']['py-modules']
