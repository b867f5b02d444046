import io

import numpy as np
import pytest

from audiogenkit.semantic import TAGS, SemanticAnalyzer, bytes_to_samples, main


def test_bytes_to_samples_scale():
    assert bytes_to_samples(b"\x00\xff").tolist() == [0.0, 1.0]


def test_bytes_to_samples_range_and_length():
    data = bytes(range(256))
    samples = bytes_to_samples(data)
    assert samples.size == 256
    assert samples.min() >= 0.0 and samples.max() <= 1.0
    assert np.all(np.diff(samples) > 0)


def test_features_are_centered_samples():
    data = np.array([0.2, 0.4, 0.9, 0.1])
    features = SemanticAnalyzer().extract_audio_features(data)
    assert features.shape == (4, 1)
    np.testing.assert_allclose(features.ravel(), data - data.mean(), atol=1e-12)


def test_features_of_empty_data():
    with pytest.raises(ValueError):
        SemanticAnalyzer().extract_audio_features([])


def test_knn_predicts_nearest_tags():
    analyzer = SemanticAnalyzer(k=1).fit([[0.0], [10.0]], [0, 3])
    assert analyzer.generate_semantic_tags([[0.1], [9.9]]) == [TAGS[0], TAGS[3]]


def test_knn_majority_vote():
    analyzer = SemanticAnalyzer(k=3).fit([[0.0], [0.1], [0.2], [5.0]], [1, 1, 2, 2])
    assert analyzer.generate_semantic_tags([[0.05]]) == [TAGS[1]]


def test_untrained_classifier_raises():
    with pytest.raises(RuntimeError):
        SemanticAnalyzer().generate_semantic_tags([[0.0]])


@pytest.mark.parametrize("labels", [[0, 4], [-1, 0], [0]])
def test_fit_rejects_bad_labels(labels):
    with pytest.raises(ValueError):
        SemanticAnalyzer().fit([[0.0], [1.0]], labels)


def test_predict_rejects_wrong_width():
    analyzer = SemanticAnalyzer(k=1).fit([[0.0], [1.0]], [0, 1])
    with pytest.raises(ValueError):
        analyzer.generate_semantic_tags([[0.0, 1.0]])


def _reference(tmp_path):
    path = tmp_path / "reference.npz"
    np.savez(path, features=np.array([[-0.5], [0.5]]), labels=np.array([0, 1]))
    return path


def test_analyze_audio_file(tmp_path):
    audio = tmp_path / "clip.raw"
    audio.write_bytes(b"\x00\xff")
    analyzer = SemanticAnalyzer(_reference(tmp_path), k=1)
    assert analyzer.analyze_audio(audio) == [TAGS[0], TAGS[1]]


def test_model_file_without_labels(tmp_path):
    path = tmp_path / "bad.npz"
    np.savez(path, features=np.zeros((2, 1)))
    with pytest.raises(ValueError):
        SemanticAnalyzer(path)


def test_main_end_to_end(tmp_path, monkeypatch, capsys):
    audio = tmp_path / "clip.raw"
    audio.write_bytes(b"\x00\xff")
    model = _reference(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO(f"{model}\n{audio}\ny\n"))
    assert main([]) == 0
    out = capsys.readouterr().out
    assert f"- {TAGS[0]}\n- {TAGS[1]}\n" in out
    assert "Performing additional analysis or actions..." in out
    assert out.rstrip().endswith("Thank you for using the Audio Semantic Analyzer!")


def test_main_missing_audio(tmp_path, monkeypatch, capsys):
    model = _reference(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO(f"{model}\n{tmp_path / 'absent.raw'}\nn\n"))
    assert main([]) == 1
    assert "error:" in capsys.readouterr().err