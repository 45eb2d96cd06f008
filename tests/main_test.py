import sys
import os
import json
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
import main

BUTTON_JSX = "export const Button = ({ primary }) => <button className={primary ? 'bg-blue-500' : 'bg-gray-200'} />\n"

@pytest.fixture
def project(tmp_path):
    (tmp_path / 'Button.jsx').write_text(BUTTON_JSX)
    (tmp_path / 'index.html').write_text('<main class="container mx-auto"></main>\n')
    (tmp_path / 'notes.md').write_text('class="ignored"\n')
    (tmp_path / 'node_modules').mkdir()
    (tmp_path / 'node_modules' / 'lib.jsx').write_text('<div className="vendor" />')
    (tmp_path / '.cache').mkdir()
    (tmp_path / '.cache' / 'old.html').write_text('<div class="stale"></div>')
    return tmp_path

def test_expression(capsys):
    assert main.main(['-e', "isActive && 'ring-2'"]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output['matched'] is True
    assert output['conditional_classes'] == [{'classes': 'ring-2', 'condition': 'isActive'}]

def test_expression_no_match(capsys):
    assert main.main(['--expression', 'styles.x']) == 0
    output = json.loads(capsys.readouterr().out)
    assert output['matched'] is False
    assert output['conditional_classes'] == []

def test_no_paths_prints_usage(capsys):
    assert main.main([]) == 2
    assert 'usage' in capsys.readouterr().err

def test_missing_path(tmp_path):
    assert main.main([str(tmp_path / 'missing.vue')]) == 1

def test_scan_directory(project, capsys):
    assert main.main([str(project)]) == 0
    results = json.loads(capsys.readouterr().out)
    assert [os.path.basename(r['file']) for r in results] == ['Button.jsx', 'index.html']
    assert [r['dialect'] for r in results] == ['jsx', 'html']
    button = results[0]['extractions'][0]
    assert button['kind'] == 'mixed'
    assert button['class_strings'] == ['bg-blue-500', 'bg-gray-200']

def test_scan_file_summary(project, capsys):
    assert main.main([str(project / 'index.html'), '--summary']) == 0
    results = json.loads(capsys.readouterr().out)
    assert len(results) == 1
    assert results[0]['dialect'] == 'html'
    assert results[0]['unique_classes'] == ['container', 'mx-auto']

def test_resolve_paths_expands_directories(project):
    files = main.resolve_paths([str(project)])
    assert sorted(f.name for f in files) == ['Button.jsx', 'index.html']
    with pytest.raises(FileNotFoundError):
        main.resolve_paths([str(project / 'nope')])
