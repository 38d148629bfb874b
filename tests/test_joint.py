import numpy as np
import pytest

from animkit.glmmath import angle_axis
from animkit.joint import Joint
from animkit.matrix3 import RotOrder


def test_defaults():
    joint = Joint("hips")
    assert joint.name == "hips"
    assert joint.id == -1
    assert joint.num_channels == 6
    assert joint.rotation_order == RotOrder.XYZ
    assert joint.parent is None
    assert joint.children == []


def test_site_joint_renamed_on_id():
    joint = Joint("Site")
    joint.id = 3
    assert joint.name == "Site3"


def test_regular_joint_keeps_name_on_id():
    joint = Joint("LeftArm")
    joint.id = 5
    assert joint.name == "LeftArm"
    assert joint.id == 5


def test_attach_moves_child():
    a, b, child = Joint("a"), Joint("b"), Joint("c")
    Joint.attach(a, child)
    assert child.parent is a
    assert a.children == [child]
    Joint.attach(b, child)
    assert child.parent is b
    assert a.children == []
    assert b.children == [child]


def test_detach_requires_matching_parent():
    a, b, child = Joint("a"), Joint("b"), Joint("c")
    Joint.attach(a, child)
    Joint.detach(b, child)
    assert child.parent is a
    Joint.detach(a, child)
    assert child.parent is None
    assert a.children == []


def test_child_at_out_of_range():
    joint = Joint("a")
    joint.append_child(Joint("b"))
    assert joint.child_at(0).name == "b"
    with pytest.raises(IndexError):
        joint.child_at(1)


def test_fk_composes_transforms():
    root, child = Joint("root"), Joint("child")
    Joint.attach(root, child)
    root.local_translation = [1.0, 2.0, 3.0]
    root.local_rotation = angle_axis(0.7, [0.0, 0.0, 1.0])
    child.local_translation = [0.0, 1.0, 0.0]
    root.fk()
    expected = root.local2parent.transform_point(child.local_translation)
    assert np.allclose(child.global_translation, expected)
    assert np.allclose(root.global_translation, root.local_translation)


def test_copy_drops_links():
    parent, joint = Joint("p"), Joint("j")
    Joint.attach(parent, joint)
    joint.id = 4
    joint.local_translation = [1.0, 0.0, 0.0]
    clone = joint.copy()
    assert clone.parent is None
    assert clone.children == []
    assert clone.id == 4
    assert clone.name == "j"
    assert np.allclose(clone.local_translation, joint.local_translation)
    clone.local_translation = [5.0, 5.0, 5.0]
    assert np.allclose(joint.local_translation, [1.0, 0.0, 0.0])