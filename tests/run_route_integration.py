import asyncio

from common.config import configure_logging
from interaction.controller import InteractionController
from interaction.policy import InteractionPolicy
from location.provider import LocationProvider
from places.models import SearchRole


async def main():
    configure_logging()

    controller = InteractionController(
        location_provider=LocationProvider(source=None),  # no device here, use the fallback
        policy=InteractionPolicy(start_panel_visible=True, end_panel_visible=True),
    )
    await controller.mount()
    print(f"\nSession ready at {controller.user_location}\n")

    await controller.handle_query(SearchRole.END, "Chorsu")
    print(f"Returned {len(controller.end_search.suggestions)} suggestions:")
    for place in controller.end_search.suggestions:
        print(f"  {place.label} ({place.coordinate.longitude}, {place.coordinate.latitude})")

    if not controller.end_search.suggestions:
        print(f"No suggestions ({controller.error})")
        return

    await controller.select_suggestion(SearchRole.END, 0)
    if controller.directions_panel is None:
        print(f"No route ({controller.error})")
        return

    print()
    print(controller.directions_panel.render())


if __name__ == "__main__":
    asyncio.run(main())
