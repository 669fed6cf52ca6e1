from collections import OrderedDict
from logging import getLogger

import numpy as np

from constrained_ik.coordinates import Transform
from constrained_ik.model.joint import calc_target_joint_dimension


logger = getLogger(__name__)


class Link(object):
    """Rigid body of a kinematic chain.

    Parameters
    ----------
    name : str
        name of this link.
    joint : constrained_ik.model.Joint or None
        joint connecting the previous link to this link.
        `None` for the base link.
    """

    def __init__(self, name, joint=None):
        self.name = name
        self.joint = joint
        self.parent = None

    def __repr__(self):
        return '#<{} {}>'.format(self.__class__.__name__, self.name)


class KinematicChain(object):
    """Serial chain of links from a fixed base link to a tip link.

    Joint positions are always given in chain order and only movable
    (non fixed) joints take a value.

    Parameters
    ----------
    base_link_name : str
        name of the fixed base link.
    name : str or None
        name of this chain.
    base_in_world : constrained_ik.coordinates.Transform or None
        pose of the base link in world frame, i.e. a transform mapping
        base frame points to world frame points.

    Examples
    --------
    >>> from constrained_ik.coordinates import Transform
    >>> from constrained_ik.model import KinematicChain
    >>> from constrained_ik.model import RotationalJoint
    >>> chain = KinematicChain('base_link')
    >>> chain.add_link('link1', RotationalJoint(axis='z'))
    #<Link link1>
    >>> chain.add_link('link2', RotationalJoint(
    ...     axis='y', origin=Transform([0, 0, 0.3])))
    #<Link link2>
    >>> chain.num_joints
    2
    """

    def __init__(self, base_link_name='base_link', name=None,
                 base_in_world=None):
        self.name = name
        if base_in_world is None:
            base_in_world = Transform()
        self.base_in_world = base_in_world
        self._links = [Link(base_link_name)]

    def add_link(self, link_name, joint):
        """Append a link connected to the current tip by `joint`.

        Parameters
        ----------
        link_name : str
            name of the new link. Must be unique in this chain.
        joint : constrained_ik.model.Joint
            joint connecting the current tip link to the new link.

        Returns
        -------
        link : constrained_ik.model.Link
            appended link.
        """
        if self.find_link(link_name) is not None:
            raise ValueError(
                'link {} already exists in chain'.format(link_name))
        link = Link(link_name, joint)
        link.parent = self._links[-1]
        joint.parent_link = link.parent
        joint.child_link = link
        self._links.append(link)
        return link

    @property
    def base_link_name(self):
        return self._links[0].name

    @property
    def tip_link_name(self):
        return self._links[-1].name

    @property
    def link_list(self):
        return list(self._links)

    @property
    def link_names(self):
        """Names of the links attached to the base, in chain order."""
        return [link.name for link in self._links[1:]]

    @property
    def joint_list(self):
        """Movable joints in chain order."""
        return [link.joint for link in self._links[1:]
                if link.joint.joint_dof > 0]

    @property
    def num_joints(self):
        return calc_target_joint_dimension(
            [link.joint for link in self._links[1:]])

    def find_link(self, link_name):
        for link in self._links:
            if link.name == link_name:
                return link
        return None

    def get_sub_chain(self, link_name):
        """Return the chain from the base link to `link_name`.

        Parameters
        ----------
        link_name : str
            last link of the sub chain.

        Returns
        -------
        sub_chain : constrained_ik.model.KinematicChain or None
            `None` if `link_name` is not a link of this chain.
        """
        if self.find_link(link_name) is None:
            logger.debug('link %s is not in chain %s', link_name, self.name)
            return None
        sub_chain = KinematicChain(self.base_link_name,
                                   name=self.name,
                                   base_in_world=self.base_in_world)
        if link_name == self.base_link_name:
            return sub_chain
        for link in self._links[1:]:
            # joints are shared with the parent chain
            sub_link = Link(link.name, link.joint)
            sub_link.parent = sub_chain._links[-1]
            sub_chain._links.append(sub_link)
            if link.name == link_name:
                break
        return sub_chain

    def forward_kinematics(self, joint_positions):
        """Compute poses of every link in base frame.

        Parameters
        ----------
        joint_positions : list[float] or numpy.ndarray
            positions of the movable joints in chain order.

        Returns
        -------
        link_poses : collections.OrderedDict[str, Transform]
            link frame to base frame transform keyed by link name,
            base link included.
        """
        joint_positions = np.asarray(joint_positions, dtype=np.float64)
        if len(joint_positions) != self.num_joints:
            raise ValueError(
                'length of joint_positions must be {}, get {}'.format(
                    self.num_joints, len(joint_positions)))
        link_poses = OrderedDict()
        pose = Transform()
        link_poses[self.base_link_name] = pose
        index = 0
        for link in self._links[1:]:
            joint = link.joint
            if joint.joint_dof > 0:
                value = joint_positions[index]
                index += joint.joint_dof
            else:
                value = 0.0
            pose = joint.child_transform(value) * pose
            link_poses[link.name] = pose
        return link_poses

    def __repr__(self):
        return '#<{} {} {} -> {}>'.format(
            self.__class__.__name__, self.name or '',
            self.base_link_name, self.tip_link_name)
