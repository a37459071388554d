# File: modgen/templates.py
"""
modgen - Code Template Engine
==============================
Pure-Python template engine for the four TypeScript files of an
Express + Prisma + Zod resource module:

    1. ``<name>.controller.ts``  request handlers wrapped in ``catchAsync``
    2. ``<name>.route.ts``       Express router wiring validators to handlers
    3. ``<name>.service.ts``     Prisma CRUD service object
    4. ``<name>.validation.ts``  Zod schemas and validation middleware

Template bodies are module-level ``string.Template`` constants; rendering is
plain ``$placeholder`` substitution with no other logic, so each template can
be unit-tested in isolation.

Bindings (all strings):
    ``name``            raw resource segment (file names, URL segments)
    ``identifier``      normalized camelCase identifier
    ``capitalized``     identifier with its first letter uppercased
    ``import_prefix``   ``../..``-style path back to the project ``src/``
    ``route_base``      API path used in the ``@route`` doc comments
"""

from __future__ import annotations

import logging
from string import Template
from typing import Dict, FrozenSet, List, Mapping, Optional

from modgen.errors import TemplateError
from modgen.models import FileRole, ModuleTarget

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("modgen.templates")

REQUIRED_BINDINGS: FrozenSet[str] = frozenset(
    {"name", "identifier", "capitalized", "import_prefix", "route_base"}
)

# ---------------------------------------------------------------------------
# Template bodies
# ---------------------------------------------------------------------------

_CONTROLLER_TEMPLATE: Template = Template("""
import { Request, Response } from 'express';
import { ${identifier}Services } from './${name}.service';
import ServerResponse from '${import_prefix}/helpers/responses/custom-response';
import catchAsync from '${import_prefix}/utils/catch-async/catch-async';

/**
 * Controller function to handle the creation of a single ${capitalized}.
 *
 * @param {Request} req - The request object containing ${name} data in the body.
 * @param {Response} res - The response object used to send the response.
 * @returns {void}
 */
export const create${capitalized} = catchAsync(async (req: Request, res: Response) => {
  // Call the service method to create a new ${name} and get the result
  const result = await ${identifier}Services.create${capitalized}(req.body);
  // Send a success response with the created ${name} data
  ServerResponse(res, true, 201, '${capitalized} created successfully', result);
});

/**
 * Controller function to handle the creation of multiple ${name}s.
 *
 * @param {Request} req - The request object containing an array of ${name} data in the body.
 * @param {Response} res - The response object used to send the response.
 * @returns {void}
 */
export const createMany${capitalized} = catchAsync(async (req: Request, res: Response) => {
  // Call the service method to create multiple ${identifier}s and get the result
  const result = await ${identifier}Services.createMany${capitalized}(req.body);
  // Send a success response with the created ${name}s data
  ServerResponse(res, true, 201, '${capitalized}s created successfully', result);
});

/**
 * Controller function to handle the update operation for a single ${name}.
 *
 * @param {Request} req - The request object containing the ID of the ${name} to update in URL parameters and the updated data in the body.
 * @param {Response} res - The response object used to send the response.
 * @returns {void}
 */
export const update${capitalized} = catchAsync(async (req: Request, res: Response) => {
  const { id } = req.params;
  // Call the service method to update the ${name} by ID and get the result
  const result = await ${identifier}Services.update${capitalized}(id, req.body);
  // Send a success response with the updated ${name} data
  ServerResponse(res, true, 200, '${capitalized} updated successfully', result);
});

/**
 * Controller function to handle the update operation for multiple ${name}s.
 *
 * @param {Request} req - The request object containing an array of ${name} data in the body.
 * @param {Response} res - The response object used to send the response.
 * @returns {void}
 */
export const updateMany${capitalized} = catchAsync(async (req: Request, res: Response) => {
  // Call the service method to update multiple ${name}s and get the result
  const result = await ${identifier}Services.updateMany${capitalized}(req.body);
  // Send a success response with the updated ${name}s data
  ServerResponse(res, true, 200, '${capitalized}s updated successfully', result);
});

/**
 * Controller function to handle the deletion of a single ${name}.
 *
 * @param {Request} req - The request object containing the ID of the ${name} to delete in URL parameters.
 * @param {Response} res - The response object used to send the response.
 * @returns {void}
 */
export const delete${capitalized} = catchAsync(async (req: Request, res: Response) => {
  const { id } = req.params;
  // Call the service method to delete the ${name} by ID
  await ${identifier}Services.delete${capitalized}(id);
  // Send a success response confirming the deletion
  ServerResponse(res, true, 200, '${capitalized} deleted successfully');
});

/**
 * Controller function to handle the deletion of multiple ${name}s.
 *
 * @param {Request} req - The request object containing an array of IDs of ${name} to delete in the body.
 * @param {Response} res - The response object used to send the response.
 * @returns {void}
 */
export const deleteMany${capitalized} = catchAsync(async (req: Request, res: Response) => {
  // Call the service method to delete multiple ${name}s and get the result
  await ${identifier}Services.deleteMany${capitalized}(req.body);
  // Send a success response confirming the deletions
  ServerResponse(res, true, 200, '${capitalized}s deleted successfully');
});

/**
 * Controller function to handle the retrieval of a single ${name} by ID.
 *
 * @param {Request} req - The request object containing the ID of the ${name} to retrieve in URL parameters.
 * @param {Response} res - The response object used to send the response.
 * @returns {void}
 */
export const get${capitalized}ById = catchAsync(async (req: Request, res: Response) => {
  const { id } = req.params;
  // Call the service method to get the ${name} by ID and get the result
  const result = await ${identifier}Services.get${capitalized}ById(id);
  // Send a success response with the retrieved ${name} data
  ServerResponse(res, true, 200, '${capitalized} retrieved successfully', result);
});

/**
 * Controller function to handle the retrieval of multiple ${name}s.
 *
 * @param {Request} req - The request object containing query parameters for filtering.
 * @param {Response} res - The response object used to send the response.
 * @returns {void}
 */
export const getMany${capitalized} = catchAsync(async (req: Request, res: Response) => {
  // Type assertion for query parameters
  const query = req.query as unknown as { searchKey?: string; showPerPage: number; pageNo: number };
  // Call the service method to get multiple ${name}s based on query parameters and get the result
  const { ${identifier}s, totalData, totalPages } = await ${identifier}Services.getMany${capitalized}({}, query.searchKey, query.showPerPage, query.pageNo);
  // Send a success response with the retrieved ${name}s data
  ServerResponse(res, true, 200, '${capitalized}s retrieved successfully', { ${identifier}s, totalData, totalPages });
});
""")

_ROUTE_TEMPLATE: Template = Template("""
// Import Router from express
import { Router } from 'express';

// Import controller from corresponding module
import {
  create${capitalized},
  createMany${capitalized},
  update${capitalized},
  updateMany${capitalized},
  delete${capitalized},
  deleteMany${capitalized},
  get${capitalized}ById,
  getMany${capitalized}
} from './${name}.controller';

//Import validation from corresponding module
import { validateCreate${capitalized}, validateCreateMany${capitalized}, validateUpdate${capitalized}, validateUpdateMany${capitalized} } from './${name}.validation';
import { validateId, validateIds, validateSearchQueries } from '${import_prefix}/handlers/common-zod-validator';

// Initialize router
const router = Router();

// Define route handlers
/**
 * @route POST ${route_base}/create-${name}
 * @description Create a new ${name}
 * @access Public
 * @param {function} controller - ['create${capitalized}']
 * @param {function} validation - ['validateCreate${capitalized}']
 */
router.post("/create-${name}", validateCreate${capitalized}, create${capitalized});

/**
 * @route POST ${route_base}/create-${name}/many
 * @description Create multiple ${name}s
 * @access Public
 * @param {function} controller - ['createMany${capitalized}']
 * @param {function} validation - ['validateCreateMany${capitalized}']
 */
router.post("/create-${name}/many", validateCreateMany${capitalized}, createMany${capitalized});

/**
 * @route PATCH ${route_base}/update-${name}/many
 * @description Update multiple ${name}s information
 * @access Public
 * @param {function} controller - ['updateMany${capitalized}']
 * @param {function} validation - ['validateIds', 'validateUpdateMany${capitalized}']
 */
router.patch("/update-${name}/many", validateIds, validateUpdateMany${capitalized}, updateMany${capitalized});

/**
 * @route PATCH ${route_base}/update-${name}/:id
 * @description Update ${name} information
 * @param {string} id - The ID of the ${name} to update
 * @access Public
 * @param {function} controller - ['update${capitalized}']
 * @param {function} validation - ['validateId', 'validateUpdate${capitalized}']
 */
router.patch("/update-${name}/:id", validateId, validateUpdate${capitalized}, update${capitalized});

/**
 * @route DELETE ${route_base}/delete-${name}/many
 * @description Delete multiple ${name}s
 * @access Public
 * @param {function} controller - ['deleteMany${capitalized}']
 * @param {function} validation - ['validateIds']
 */
router.delete("/delete-${name}/many", validateIds, deleteMany${capitalized});

/**
 * @route DELETE ${route_base}/delete-${name}/:id
 * @description Delete a ${name}
 * @param {string} id - The ID of the ${name} to delete
 * @access Public
 * @param {function} controller - ['delete${capitalized}']
 * @param {function} validation - ['validateId']
 */
router.delete("/delete-${name}/:id", validateId, delete${capitalized});

/**
 * @route GET ${route_base}/get-${name}/many
 * @description Get multiple ${name}s
 * @access Public
 * @param {function} controller - ['getMany${capitalized}']
 * @param {function} validation - ['validateSearchQueries']
 */
router.get("/get-${name}/many", validateSearchQueries, getMany${capitalized});

/**
 * @route GET ${route_base}/get-${name}/:id
 * @description Get a ${name} by ID
 * @param {string} id - The ID of the ${name} to retrieve
 * @access Public
 * @param {function} controller - ['get${capitalized}ById']
 * @param {function} validation - ['validateId']
 */
router.get("/get-${name}/:id", validateId, get${capitalized}ById);

// Export the router
module.exports = router;
""")

_SERVICE_TEMPLATE: Template = Template("""
import { Prisma } from '@prisma/client';

// Import the Prisma Client instance
import { prismaClient } from '${import_prefix}/index';

/**
 * Service function to create a new ${identifier}.
 *
 * @param data - The data to create a new ${identifier}.
 * @returns {Promise<${capitalized}>} - The created ${identifier}.
 */
const create${capitalized} = async (data: Prisma.${capitalized}CreateInput) => {
  return await prismaClient.${identifier}.create({ data });
};

/**
 * Service function to create multiple ${identifier}.
 *
 * @param data - An array of data to create multiple ${identifier}.
 * @returns {Promise<${capitalized}[]>} - The created ${identifier}.
 */
const createMany${capitalized} = async (data: Prisma.${capitalized}CreateManyInput[]) => {
  return await prismaClient.${identifier}.createMany({ data });
};

/**
 * Service function to update a single ${identifier} by ID.
 *
 * @param id - The ID of the ${identifier} to update.
 * @param data - The updated data for the ${identifier}.
 * @returns {Promise<${capitalized}>} - The updated ${identifier}.
 */
const update${capitalized} = async (id: string, data: Prisma.${capitalized}UpdateInput) => {
  return await prismaClient.${identifier}.update({
    where: { id },
    data,
  });
};

/**
 * Service function to update multiple ${identifier}.
 *
 * @param data - An array of data to update multiple ${identifier}.
 * @returns {Promise<${capitalized}[]>} - The updated ${identifier}.
 */
const updateMany${capitalized} = async (data: { id: string; updates: Prisma.${capitalized}UpdateInput }[]) => {
  const updatePromises = data.map(({ id, updates }) =>
    prismaClient.${identifier}.update({
      where: { id },
      data: updates,
    })
  );
  return await Promise.all(updatePromises);
};

/**
 * Service function to delete a single ${identifier} by ID.
 *
 * @param id - The ID of the ${identifier} to delete.
 * @returns {Promise<${capitalized}>} - The deleted ${identifier}.
 */
const delete${capitalized} = async (id: string) => {
  return await prismaClient.${identifier}.delete({
    where: { id },
  });
};

/**
 * Service function to delete multiple ${identifier}.
 *
 * @param ids - An array of IDs of ${identifier} to delete.
 * @returns {Promise<${capitalized}[]>} - The deleted ${identifier}.
 */
const deleteMany${capitalized} = async (ids: string[]) => {
  return await prismaClient.${identifier}.deleteMany({
    where: {
      id: { in: ids },
    },
  });
};

/**
 * Service function to retrieve a single ${identifier} by ID.
 *
 * @param id - The ID of the ${identifier} to retrieve.
 * @returns {Promise<${capitalized}>} - The retrieved ${identifier}.
 */
const get${capitalized}ById = async (id: string) => {
  return await prismaClient.${identifier}.findUnique({
    where: { id },
  });
};

/**
 * Service function to retrieve multiple ${identifier}s based on query parameters.
 *
 * @param query - The query parameters for filtering ${identifier}s.
 * @param {string | undefined} searchKey - The optional search key for filtering ${identifier}s by ${identifier} fields.
 * @param {number} showPerPage - The number of items to show per page.
 * @param {number} pageNo - The page number for pagination.
 * @returns {Promise<{ ${identifier}s: Prisma.${capitalized}[], totalData: number, totalPages: number }>} - The retrieved ${identifier}s, total count, and total pages.
 */
const getMany${capitalized} = async (
  query: Prisma.${capitalized}WhereInput,
  searchKey: string | undefined,
  showPerPage: number,
  pageNo: number
): Promise<{ ${identifier}s: Prisma.${capitalized}[]; totalData: number; totalPages: number }> => {
  // Build the search filter based on the search key, if provided
  const searchFilter: Prisma.${capitalized}WhereInput = {
    ...query,
    OR: searchKey
      ? [
          { filedName: { contains: searchKey, mode: 'insensitive' } },
          // Add more fields as needed
        ]
      : undefined,
  };

  // Calculate the number of items to skip based on the page number
  const skipItems = (pageNo - 1) * showPerPage;

  // Find the total count of matching ${identifier}s
  const totalData = await prismaClient.${identifier}.count({
    where: searchFilter,
  });

  // Find ${identifier}s based on the search filter with pagination
  const ${identifier}s = await prismaClient.${identifier}.findMany({
    where: searchFilter,
    skip: skipItems,
    take: showPerPage,
    select: {
      // filed: true,
      // filed: false,
      // Add other fields as needed, excluding sensitive ones
    },
  });

  // Calculate the total number of pages
  const totalPages = Math.ceil(totalData / showPerPage);

  return { ${identifier}s, totalData, totalPages };
};

export const ${identifier}Services = {
  create${capitalized},
  createMany${capitalized},
  update${capitalized},
  updateMany${capitalized},
  delete${capitalized},
  deleteMany${capitalized},
  get${capitalized}ById,
  getMany${capitalized},
};
""")

_VALIDATION_TEMPLATE: Template = Template("""
import { NextFunction, Request, Response } from 'express';
import { z } from 'zod';
import zodErrorHandler from '${import_prefix}/handlers/zod-error-handler';

/**
 * Zod schema for validating ${identifier} data during creation.
 */
const zodCreate${capitalized}Schema = z.object({
  // Define fields required for creating a new ${identifier}.
  // Example:
  // filedName: z.string({ required_error: 'Please provide a filedName.' }).min(1, "Can't be empty."),
}).strict();

/**
 * Middleware function to validate ${identifier} creation data using Zod schema.
 * @param {Request} req - The request object.
 * @param {Response} res - The response object.
 * @param {NextFunction} next - The next middleware function.
 * @returns {void}
 */
export const validateCreate${capitalized} = (req: Request, res: Response, next: NextFunction) => {
  // Validate the request body for creating a new ${identifier}
  const parseResult = zodCreate${capitalized}Schema.safeParse(req.body);

  // If validation fails, send an error response using the Zod error handler
  if (!parseResult.success) {
    return zodErrorHandler(req, res, parseResult.error);
  }

  // If validation passes, proceed to the next middleware function
  return next();
};

/**
 * Zod schema for validating multiple ${identifier} data during creation.
 */
const zodCreateMany${capitalized}Schema = z.array(zodCreate${capitalized}Schema);

/**
 * Middleware function to validate multiple ${identifier} creation data using Zod schema.
 * @param {Request} req - The request object.
 * @param {Response} res - The response object.
 * @param {NextFunction} next - The next middleware function.
 * @returns {void}
 */
export const validateCreateMany${capitalized} = (req: Request, res: Response, next: NextFunction) => {
  const parseResult = zodCreateMany${capitalized}Schema.safeParse(req.body);
  if (!parseResult.success) {
    return zodErrorHandler(req, res, parseResult.error);
  }
  return next();
};

/**
 * Zod schema for validating ${identifier} data during updates.
 */
const zodUpdate${capitalized}Schema = z.object({
  // Define fields required for updating an existing ${identifier}.
  // Example:
  // fieldName: z.string({ required_error: 'Please provide a filedName.' }).optional(), // Fields can be optional during updates
}).strict();

/**
 * Middleware function to validate ${identifier} update data using Zod schema.
 * @param {Request} req - The request object.
 * @param {Response} res - The response object.
 * @param {NextFunction} next - The next middleware function.
 * @returns {void}
 */
export const validateUpdate${capitalized} = (req: Request, res: Response, next: NextFunction) => {
  // Validate the request body for updating an existing ${identifier}
  const parseResult = zodUpdate${capitalized}Schema.safeParse(req.body);

  // If validation fails, send an error response using the Zod error handler
  if (!parseResult.success) {
    return zodErrorHandler(req, res, parseResult.error);
  }

  // If validation passes, proceed to the next middleware function
  return next();
};

/**
 * Zod schema for validating multiple ${identifier} data during updates.
 */
const zodUpdateMany${capitalized}Schema = z.array(zodUpdate${capitalized}Schema);

/**
 * Middleware function to validate multiple ${identifier} update data using Zod schema.
 * @param {Request} req - The request object.
 * @param {Response} res - The response object.
 * @param {NextFunction} next - The next middleware function.
 * @returns {void}
 */
export const validateUpdateMany${capitalized} = (req: Request, res: Response, next: NextFunction) => {
  const parseResult = zodUpdateMany${capitalized}Schema.safeParse(req.body);
  if (!parseResult.success) {
    return zodErrorHandler(req, res, parseResult.error);
  }
  return next();
};
""")

_TEMPLATES: Dict[str, Template] = {
    FileRole.CONTROLLER.value: _CONTROLLER_TEMPLATE,
    FileRole.ROUTE.value: _ROUTE_TEMPLATE,
    FileRole.SERVICE.value: _SERVICE_TEMPLATE,
    FileRole.VALIDATION.value: _VALIDATION_TEMPLATE,
}


# ---------------------------------------------------------------------------
# Bindings
# ---------------------------------------------------------------------------


def build_bindings(target: ModuleTarget) -> Dict[str, str]:
    """Collect every placeholder value for *target*'s templates."""
    return {
        "name": target.resource.raw,
        "identifier": target.resource.identifier,
        "capitalized": target.resource.capitalized,
        "import_prefix": target.import_prefix,
        "route_base": target.route_base,
    }


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def template_ids() -> List[str]:
    """Known template ids, in file-role order."""
    return list(_TEMPLATES)


def render(template_id: str, bindings: Mapping[str, str]) -> str:
    """
    Render one template and trim surrounding whitespace.

    Raises:
        TemplateError: unknown *template_id* or a placeholder missing from
            *bindings*.
    """
    template: Optional[Template] = _TEMPLATES.get(template_id)
    if template is None:
        raise TemplateError(
            f"Unknown template '{template_id}'. "
            f"Expected one of: {', '.join(template_ids())}."
        )

    missing: List[str] = sorted(REQUIRED_BINDINGS - set(bindings))
    if missing:
        raise TemplateError(
            f"Template '{template_id}' is missing bindings: {', '.join(missing)}."
        )

    try:
        return template.substitute(bindings).strip()
    except (KeyError, ValueError) as exc:
        raise TemplateError(f"Failed to render '{template_id}': {exc}") from exc


class TemplateRenderer:
    """
    Renders the file set of one module.

    Stateless apart from the bindings it was built with; cheap to create.
    """

    def __init__(self, bindings: Mapping[str, str]) -> None:
        self._bindings: Dict[str, str] = dict(bindings)

    @classmethod
    def for_target(cls, target: ModuleTarget) -> "TemplateRenderer":
        return cls(build_bindings(target))

    def render(self, role: FileRole) -> str:
        content: str = render(role.value, self._bindings)
        logger.debug(
            "Rendered %s template for '%s' (%d chars).",
            role.value,
            self._bindings.get("name"),
            len(content),
        )
        return content

    def render_all(self) -> Dict[FileRole, str]:
        return {role: self.render(role) for role in FileRole}


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "REQUIRED_BINDINGS",
    "build_bindings",
    "template_ids",
    "render",
    "TemplateRenderer",
]
