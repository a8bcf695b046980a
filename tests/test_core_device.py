"""Tests for the device abstraction."""

import pytest
import torch

from svsim.core import Device, default_device, device, resolve_device


def test_sv_cpu_device():
    """sv_cpu maps to the CPU with complex128 amplitudes."""
    dev = device("sv_cpu")
    assert isinstance(dev, Device)
    assert dev.name == "sv_cpu"
    assert dev.as_torch_device().type == "cpu"
    assert dev.complex_dtype == torch.complex128
    assert dev.dtype == torch.float64


def test_default_device_is_cpu():
    assert default_device().name == "sv_cpu"


def test_unknown_device_name():
    with pytest.raises(ValueError, match="Unsupported device name"):
        device("tpu")


@pytest.mark.skipif(torch.cuda.is_available(), reason="CUDA present")
def test_sv_cuda_unavailable():
    """Requesting CUDA without it is a RuntimeError."""
    with pytest.raises(RuntimeError, match="CUDA"):
        device("sv_cuda")


class TestResolveDevice:
    def test_none(self):
        assert resolve_device(None).name == "sv_cpu"

    def test_device_passthrough(self):
        dev = device("sv_cpu")
        assert resolve_device(dev) is dev

    def test_string(self):
        assert resolve_device("sv_cpu").name == "sv_cpu"

    def test_torch_device(self):
        assert resolve_device(torch.device("cpu")).name == "sv_cpu"
