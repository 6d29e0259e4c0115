from rich.console import Console

from scripts.validate_dialogue import collect_violations, main


def quiet_console():
    return Console(record=True, width=120)


def test_bundled_sample_is_clean():
    assert main([], console=quiet_console()) == 0


def test_violations_reported():
    text = "1,Happy\n2,Purple,hm\nz,Sad,bad id\n3,Sad,a,1,c\n4,Happy,same\n4,Happy,same\n5,Sad, \n"
    violations, data = collect_violations(text)
    joined = "\n".join(violations)
    assert "Row 0 has an id but only 2 cell(s)" in joined
    assert "'Purple' is unknown" in joined
    assert "Row 2 column 0: 'z' is not an integer" in joined
    assert "Row 3 has 5 cells" in joined
    assert "repeats 'same' 2 times" in joined
    assert "Row 6 has empty dialogue text" in joined
    assert len(data.key_order) == 4


def test_main_exit_code_on_bad_file(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("x,Happy,oops\n")
    console = quiet_console()
    assert main([str(path)], console=console) == 1
    assert "FAILED" in console.export_text()
    assert main([str(tmp_path / "missing.csv")], console=quiet_console()) == 1
