from samples import DATASET_NAMES, dataset_availability, load_datasets, read_dataset


def write_csv(directory, name, content):
    path = directory / f"{name}.csv"
    path.write_text(content, encoding="utf-8")
    return path


def test_missing_files_yield_empty_lists(tmp_path):
    assert load_datasets(tmp_path) == {"fake": [], "real": [], "manual_testing": []}


def test_rows_map_headers_to_strings(tmp_path):
    write_csv(
        tmp_path,
        "fake",
        "title,text,subject,date\n"
        "Pope endorses candidate,Shocking claim with no source,News,2017\n"
        "Moon base revealed,Secret photos leaked,politics,2016\n",
    )

    data = load_datasets(tmp_path)

    assert data["fake"] == [
        {"title": "Pope endorses candidate", "text": "Shocking claim with no source", "subject": "News", "date": "2017"},
        {"title": "Moon base revealed", "text": "Secret photos leaked", "subject": "politics", "date": "2016"},
    ]
    assert data["real"] == []
    assert data["manual_testing"] == []


def test_quoted_fields_keep_commas_and_escaped_quotes(tmp_path):
    path = write_csv(
        tmp_path,
        "real",
        'title,text\n'
        '"Budget passes, 52-48","The senator said ""we did it"" after the vote"\n',
    )

    assert read_dataset(path) == [
        {"title": "Budget passes, 52-48", "text": 'The senator said "we did it" after the vote'},
    ]


def test_cells_are_stripped_and_missing_cells_are_empty(tmp_path):
    path = write_csv(
        tmp_path,
        "manual_testing",
        " title , text ,class\n"
        "  Headline one ,  Body one  ,0\n"
        "Headline two,Body two\n",
    )

    assert read_dataset(path) == [
        {"title": "Headline one", "text": "Body one", "class": "0"},
        {"title": "Headline two", "text": "Body two", "class": ""},
    ]


def test_overlong_first_row_does_not_shift_columns(tmp_path):
    path = write_csv(tmp_path, "fake", "title,text\nA,B,extra\nC,D\n")

    assert read_dataset(path) == [{"title": "C", "text": "D"}]


def test_rows_with_extra_fields_are_skipped(tmp_path):
    path = write_csv(tmp_path, "real", "title,text\nA,B\nC,D,extra,more\nE,F\n")

    assert read_dataset(path) == [
        {"title": "A", "text": "B"},
        {"title": "E", "text": "F"},
    ]


def test_limit_counts_only_kept_rows(tmp_path):
    path = write_csv(tmp_path, "real", "title,text\nA,B,extra\nC,D\nE,F\n")

    assert read_dataset(path, limit=1) == [{"title": "C", "text": "D"}]


def test_values_are_not_converted(tmp_path):
    path = write_csv(tmp_path, "real", "id,flag,note\n007,True,NA\n")

    assert read_dataset(path) == [{"id": "007", "flag": "True", "note": "NA"}]


def test_blank_lines_are_skipped(tmp_path):
    path = write_csv(tmp_path, "real", "title,text\n\nA,B\n\n\nC,D\n")

    assert read_dataset(path) == [
        {"title": "A", "text": "B"},
        {"title": "C", "text": "D"},
    ]


def test_limit_caps_rows_per_dataset(tmp_path):
    rows = "".join(f"Title {i},Text {i}\n" for i in range(10))
    write_csv(tmp_path, "fake", "title,text\n" + rows)
    write_csv(tmp_path, "real", "title,text\n" + rows)

    data = load_datasets(tmp_path, limit=3)

    assert len(data["fake"]) == 3
    assert len(data["real"]) == 3
    assert data["fake"][0] == {"title": "Title 0", "text": "Text 0"}


def test_header_only_file_is_empty(tmp_path):
    write_csv(tmp_path, "fake", "title,text\n")

    assert load_datasets(tmp_path)["fake"] == []


def test_empty_file_is_empty(tmp_path):
    write_csv(tmp_path, "fake", "")

    assert load_datasets(tmp_path)["fake"] == []


def test_unreadable_file_yields_empty_list(tmp_path):
    (tmp_path / "real.csv").write_bytes(b"title,text\n\xff\xfe\xfa,\xc3\x28\n")
    write_csv(tmp_path, "fake", "title,text\nA,B\n")

    data = load_datasets(tmp_path)

    assert data["real"] == []
    assert data["fake"] == [{"title": "A", "text": "B"}]


def test_dataset_availability(tmp_path):
    write_csv(tmp_path, "fake", "title\nA\n")

    assert dataset_availability(tmp_path) == {
        "fake": True,
        "real": False,
        "manual_testing": False,
    }
    assert tuple(dataset_availability(tmp_path)) == DATASET_NAMES
