"""
==============================================================================
Console Menu Module
==============================================================================

Interactive console front end for the catalog.

This module implements:
- CatalogMenu: main menu loop and one handler per menu option
- PromptCancelled: raised when the user types 'back' to leave a flow

Menu Options:
-------------
1. View all products (sort + page navigation)
2. Add a product
3. Update a product
4. Remove a product
5. Search products
6. Add a review
7. View reviews
8. Exit

Input and output functions are injected so the whole menu can be driven
from tests with scripted input.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Tuple

from shopcatalog.catalog import PageResult, Product, SortKey
from shopcatalog.core import AppException
from shopcatalog.services import CatalogService
from shopcatalog.utils.validators import (
    PageNumberValidator,
    PriceValidator,
    ProductIdValidator,
    RatingValidator,
    TextValidator,
)


# Module logger
logger = logging.getLogger(__name__)


InputFunc = Callable[[str], str]
OutputFunc = Callable[[str], None]


class PromptCancelled(Exception):
    """The user asked to go back to the main menu."""


class CatalogMenu:
    """
    Console menu driving a CatalogService.

    Every prompt re-asks until its validator accepts the input. Errors
    raised by the service are shown to the user and the menu carries on.

    Example:
        >>> menu = CatalogMenu(service, page_size=5)
        >>> menu.run()
    """

    BACK_COMMAND = "back"

    MENU_OPTIONS: Tuple[Tuple[str, str], ...] = (
        ("1", "View all products"),
        ("2", "Add a product"),
        ("3", "Update a product"),
        ("4", "Remove a product"),
        ("5", "Search products"),
        ("6", "Add a review"),
        ("7", "View product reviews"),
        ("8", "Exit"),
    )

    EXIT_OPTION = "8"

    def __init__(
        self,
        service: CatalogService,
        input_func: InputFunc = input,
        output_func: OutputFunc = print,
        page_size: int = 5,
        default_sort: str = "name",
        app_name: str = "Shopping Application",
    ) -> None:
        self._service = service
        self._in = input_func
        self._out = output_func
        self._page_size = page_size
        self._default_sort = SortKey.parse(default_sort)
        self._app_name = app_name

        self._id_validator = ProductIdValidator()
        self._price_validator = PriceValidator()
        self._rating_validator = RatingValidator()
        self._page_validator = PageNumberValidator()

        self._actions: Dict[str, Callable[[], None]] = {
            "1": self.view_products,
            "2": self.add_product,
            "3": self.update_product,
            "4": self.remove_product,
            "5": self.search_products,
            "6": self.add_review,
            "7": self.view_reviews,
        }

    # =========================================================================
    # MAIN LOOP
    # =========================================================================

    def run(self) -> None:
        """Run the menu until the user exits or input is exhausted."""
        self._out(f"Welcome to the {self._app_name}!\n")
        stats = self._service.get_stats()
        self._out(f"Catalog: {stats['total_products']} products, {stats['total_reviews']} reviews")

        while True:
            self._show_main_menu()

            try:
                choice = self._in("Please choose an option: ").strip()
            except EOFError:
                logger.info("Input closed, leaving main menu")
                return

            if choice == self.EXIT_OPTION:
                self._goodbye()
                return

            action = self._actions.get(choice)
            if action is None:
                if not self._handle_invalid_choice():
                    return
                continue

            try:
                action()
            except PromptCancelled:
                self._out("Returning to main menu...")
                logger.info("User returned to the main menu")
            except AppException as e:
                logger.warning(f"{e.code}: {e.message}")
                self._out(f"❌ {e.message}")
            except EOFError:
                logger.info("Input closed, leaving main menu")
                return

    def _show_main_menu(self) -> None:
        self._out("\n========= Main Menu =========")
        for key, label in self.MENU_OPTIONS:
            self._out(f"{key}. {label}")
        self._out("=============================")

    def _handle_invalid_choice(self) -> bool:
        """Tell the user the choice was invalid; return False to exit."""
        self._out("❌ Invalid choice. Please try again.")
        try:
            response = self._in("Would you like to continue (y/n)? ")
        except EOFError:
            logger.info("Input closed, leaving main menu")
            return False

        if response.strip().lower() != "y":
            self._goodbye()
            return False
        return True

    def _goodbye(self) -> None:
        self._out(f"Thank you for using the {self._app_name}! Goodbye.")

    # =========================================================================
    # MENU ACTIONS
    # =========================================================================

    def view_products(self) -> None:
        """List the catalog page by page."""
        raw_sort = self._in("Sort by (name/price/category) [default]: ").strip()
        sort_key = SortKey.parse(raw_sort) if raw_sort else self._default_sort

        current = self._service.list_products(
            sort_by=sort_key.value, page=1, page_size=self._page_size
        )
        self._render_page(current)

        while current.total_pages > 1:
            nav = self._in(
                "Navigation: (N)ext, (P)revious, a page number, or Enter to return: "
            ).strip()

            if not nav:
                return

            requested = self._resolve_navigation(nav, current)
            if requested is None:
                self._out("❌ Invalid input.")
                continue

            result = self._service.list_products(
                sort_by=sort_key.value, page=requested, page_size=self._page_size
            )
            if not result.valid:
                self._out("❌ Invalid page number")
                continue

            current = result
            self._render_page(current)

    def add_product(self) -> None:
        """Collect a new product and add it to the catalog."""
        self._out("\n=== Add a New Product ===")
        logger.info("Attempting to add a new product.")

        product_id = self._prompt_new_product_id()
        name = self._prompt("Enter Product Name: ", TextValidator("Product Name").validate)
        price = self._prompt("Enter Product Price: ", self._price_validator.validate)
        description = self._prompt(
            "Enter Product Description: ", TextValidator("Product Description").validate
        )
        category = self._prompt(
            "Enter Product Category: ", TextValidator("Product Category").validate
        )

        product = Product(
            id=product_id,
            name=name,
            price=price,
            description=description,
            category=category,
        )
        self._service.add_product(product)
        self._out("✅ Product added successfully!")

    def update_product(self) -> None:
        """Replace the attributes of an existing product."""
        self._out("\n=== Update an Existing Product ===")
        product_id = self._in("Enter Product ID to update: ").strip()
        product = self._service.get_product(product_id)

        self._out(f"Current Product: {product.name} - ${product.price} ({product.description})")

        name = self._prompt("Enter Product Name: ", TextValidator("Product Name").validate)
        price = self._prompt("Enter Product Price: ", self._price_validator.validate)
        description = self._prompt(
            "Enter Product Description: ", TextValidator("Product Description").validate
        )
        category = self._in(
            f"Enter new Product Category (leave blank to keep '{product.category}'): "
        )

        self._service.update_product(product_id, name, price, description, category)
        self._out(f"✅ Product {product_id} updated successfully.")

    def remove_product(self) -> None:
        self._out("\n=== Remove a Product ===")
        product_id = self._in("Enter Product ID to remove: ").strip()

        self._service.remove_product(product_id)
        self._out(f"✅ Product {product_id} removed successfully.")

    def search_products(self) -> None:
        self._out("\n=== Search Products ===")
        keyword = self._in("Enter a keyword (Product ID or Name): ").strip()

        results = self._service.search(keyword)
        if not results:
            self._out("No products found matching your search criteria.")
            return

        self._out("Search Results:")
        for product in results:
            self._out(product.display_line())

    def add_review(self) -> None:
        """Add a review to an existing product."""
        product_id = self._in("Enter Product ID to review: ").strip()
        self._service.get_product(product_id)

        user = self._prompt("Enter your name: ", TextValidator("Name").validate)
        rating = self._prompt("Enter your rating (1-5): ", self._rating_validator.validate)
        comment = self._prompt("Enter your review comment: ", TextValidator("Comment").validate)

        self._service.add_review(product_id, user=user, rating=rating, comment=comment)
        self._out("✅ Review added successfully!")

    def view_reviews(self) -> None:
        product_id = self._in("Enter Product ID to view reviews: ").strip()
        product = self._service.get_product(product_id)

        self._out(f"Reviews for {product.name}:")
        if not product.reviews:
            self._out("No reviews for this product yet.")
            return

        for review in product.reviews:
            self._out(review.display_line())
        self._out(f"Average rating: {self._service.get_average_rating(product_id):.1f}/5")

    # =========================================================================
    # PROMPT HELPERS
    # =========================================================================

    def _prompt(self, prompt: str, validate: Callable[[str], Tuple[bool, object, Optional[str]]]):
        """Ask until ``validate`` accepts the input; return the normalized value."""
        while True:
            is_valid, value, error = validate(self._in(prompt))
            if is_valid:
                return value
            self._out(f"❌ {error}")

    def _prompt_new_product_id(self) -> str:
        """
        Ask for an ID that is not in the catalog yet.

        Raises:
            PromptCancelled: If the user types 'back'
        """
        while True:
            raw = self._in(f"Enter Product ID (type '{self.BACK_COMMAND}' to return): ")

            if raw.strip().lower() == self.BACK_COMMAND:
                raise PromptCancelled()

            is_valid, product_id, error = self._id_validator.validate(raw)
            if not is_valid:
                self._out(f"❌ {error}")
                logger.warning(f"Rejected product ID input: {error}")
                continue

            if self._service.product_exists(product_id):
                self._out(f"❌ Product with ID {product_id} already exists.")
                logger.warning(f"Product with ID {product_id} already exists.")
                continue

            return product_id

    def _resolve_navigation(self, nav: str, current: PageResult) -> Optional[int]:
        """Translate N / P / page number into a page, or None if unusable."""
        command = nav.upper()
        if command == "N":
            return current.page + 1 if current.has_next else None
        if command == "P":
            return current.page - 1 if current.has_previous else None

        is_valid, page, _ = self._page_validator.validate(nav)
        return page if is_valid else None

    def _render_page(self, result: PageResult) -> None:
        if not result.items:
            self._out("No products available in the catalog.")
            return

        self._out(f"Product Catalog (Page {result.page}/{result.total_pages}):")
        for product in result.items:
            self._out(product.display_line())
