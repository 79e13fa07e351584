"""Example workflow demonstrating validation and simulation."""

from flowsim.core import NodeFactory, export_workflow_json, simulate_workflow, validate_workflow
from flowsim.models import Edge, NodeKind, Workflow


def create_onboarding_workflow() -> Workflow:
    """
    Create an example employee onboarding workflow.

    This workflow:
    1. Starts onboarding
    2. Collects documents from the new hire
    3. Sends a welcome email
    4. Asks a manager to approve equipment
    5. Completes onboarding
    """
    factory = NodeFactory()

    start = factory.create_node(NodeKind.START, title="Employee Onboarding")
    documents = factory.create_node(NodeKind.TASK, title="Collect documents", assignee="HR Team")
    welcome = factory.create_node(
        NodeKind.AUTOMATED,
        title="Send welcome email",
        action_id="send_email",
        action_params={"to": "new.hire@example.com", "subject": "Welcome aboard"}
    )
    approval = factory.create_node(NodeKind.APPROVAL, title="Approve equipment", approver_role="Manager")
    end = factory.create_node(NodeKind.END, end_message="Onboarding complete")

    edges = [
        Edge(id="e1", source=start.id, target=documents.id),
        Edge(id="e2", source=documents.id, target=welcome.id),
        Edge(id="e3", source=welcome.id, target=approval.id),
        Edge(id="e4", source=approval.id, target=end.id),
    ]

    return Workflow(nodes=[start, documents, welcome, approval, end], edges=edges)


def main():
    """Validate and simulate the example workflow."""
    workflow = create_onboarding_workflow()

    print("Workflow Simulator - Example Workflow")
    print("=" * 50)
    print(f"Number of Nodes: {len(workflow.nodes)}")
    print(f"Number of Edges: {len(workflow.edges)}")
    print()

    validation = validate_workflow(workflow.nodes, workflow.edges)
    print(f"Valid: {validation.is_valid}")
    for error in validation.errors:
        print(f"  • {error}")
    print()

    result = simulate_workflow(workflow)
    print("Execution trace:")
    for step in result.steps:
        print(f"  {step}")
    print()

    print("Serialized workflow:")
    print(export_workflow_json(workflow.nodes, workflow.edges))


if __name__ == "__main__":
    main()
