"""
tests/test_models.py
─────────────────────
Tests for Pydantic v2 data models.
"""
import pytest
from pydantic import ValidationError

from config.equipment import MachineClass
from src.data.models import (
    BearingGeometry,
    DtcFault,
    OilAnalysis,
    VibrationFeatureSet,
    VibrationSignal,
    WearParticleAnalysis,
)


class TestBearingGeometry:
    def test_pitch_diameter(self, bearing_geometry):
        assert bearing_geometry.pitch_diameter == pytest.approx(65.0)

    def test_contact_angle_default(self):
        geometry = BearingGeometry(inner_race_diameter=20, outer_race_diameter=47,
                                   ball_diameter=7.9, number_of_balls=8)
        assert geometry.contact_angle == 0.0

    def test_rejects_non_positive_dimensions(self):
        with pytest.raises(ValidationError):
            BearingGeometry(inner_race_diameter=20, outer_race_diameter=47,
                            ball_diameter=0.0, number_of_balls=8)

    def test_rejects_zero_balls(self):
        with pytest.raises(ValidationError):
            BearingGeometry(inner_race_diameter=20, outer_race_diameter=47,
                            ball_diameter=7.9, number_of_balls=0)

    def test_frozen(self, bearing_geometry):
        with pytest.raises(ValidationError):
            bearing_geometry.number_of_balls = 12


class TestVibrationSignal:
    def test_machine_class_coerced(self, now):
        signal = VibrationSignal(equipment_id="ME-PORT", values=(0.0, 1.0), sample_rate=100.0,
                                 machine_class="II", timestamp=now)
        assert signal.machine_class == MachineClass.II

    def test_sample_rate_must_be_positive(self):
        with pytest.raises(ValidationError):
            VibrationSignal(equipment_id="ME-PORT", values=(0.0,), sample_rate=0.0)

    def test_optional_layers_default_to_none(self):
        signal = VibrationSignal(equipment_id="ME-PORT", values=(), sample_rate=10.0)
        assert signal.rpm is None
        assert signal.machine_class is None
        assert signal.bearing_geometry is None

    def test_feature_set_defaults(self):
        features = VibrationFeatureSet(rms=0.0, crest_factor=0.0, kurtosis=0.0, peak_frequency=0.0,
                                       sample_count=0, sample_rate=1.0)
        assert features.bands == (0.0, 0.0, 0.0, 0.0)
        assert features.metadata is None
        assert features.bearing_detections is None


class TestOilAnalysis:
    def test_only_identity_required(self, now):
        oil = OilAnalysis(id="OA-9", equipment_id="EQ", sample_date=now)
        assert oil.iron is None
        assert oil.org_id is None

    def test_negative_concentration_rejected(self, now):
        with pytest.raises(ValidationError):
            OilAnalysis(id="OA-9", equipment_id="EQ", sample_date=now, iron=-1.0)

    def test_water_percentage_bounds(self, now):
        with pytest.raises(ValidationError):
            OilAnalysis(id="OA-9", equipment_id="EQ", sample_date=now, water_content=120.0)

    def test_model_dump(self, clean_oil):
        data = clean_oil.model_dump()
        assert data["equipment_id"] == "ME-PORT"
        assert data["calcium"] == 1000.0


class TestWearParticleAnalysis:
    def test_particle_percentage_bounds(self, now):
        with pytest.raises(ValidationError):
            WearParticleAnalysis(id="WP-9", equipment_id="EQ", sample_date=now, cutting_particles=101.0)


class TestDtcFault:
    def test_defaults(self):
        fault = DtcFault(spn=190, fmi=2)
        assert fault.occurrence_count == 1
        assert fault.severity is None

    @pytest.mark.parametrize("severity", [0, 5])
    def test_severity_range(self, severity):
        with pytest.raises(ValidationError):
            DtcFault(spn=190, fmi=2, severity=severity)
