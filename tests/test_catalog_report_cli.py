from scripts.catalog_report import main


def test_cli_prints_report(catalog_dir, capsys):
    main([str(catalog_dir), "--top", "5"])
    out = capsys.readouterr().out
    assert "Courses: 5" in out
    assert "STAT*999" in out
    assert "Hints:" in out
